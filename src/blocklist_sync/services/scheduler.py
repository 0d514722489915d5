"""
Периодический запуск задачи в фоне.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from blocklist_sync.core.types import Seconds

logger = logging.getLogger(__name__)


class RepeatingTask:
    """Фоновая задача, повторяемая с фиксированным интервалом.

    Следующий запуск отсчитывается от окончания предыдущего, поэтому циклы
    никогда не пересекаются. Остановка не прерывает текущий цикл: он
    доработает, после чего цикл завершится.
    """

    def __init__(
        self,
        interval: Seconds,
        action: Callable[[], Awaitable[Any]],
        run_at_start: bool = True,
        name: str = "repeating task",
    ):
        """
        Args:
            interval: Интервал между запусками в секундах
            action: Асинхронная функция одного цикла
            run_at_start: Запустить сразу, не дожидаясь первого интервала
            name: Имя для логов
        """
        self.interval = interval
        self.action = action
        self.run_at_start = run_at_start
        self.name = name
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Запускает фоновый цикл."""
        if self.running:
            logger.warning(f"⚠️ {self.name} already running")
            return

        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._loop())
        logger.info(f"⏱ {self.name} started (interval: {self.interval:g}s)")

    async def stop(self) -> None:
        """Останавливает цикл, дожидаясь завершения текущего запуска."""
        if self._task is None:
            return

        self._stop_event.set()
        try:
            await self._task
        finally:
            self._task = None

        logger.info(f"🛑 {self.name} stopped")

    async def run_once(self) -> bool:
        """Выполняет действие, если оно сейчас не выполняется.

        Returns:
            False, если запуск пропущен, потому что предыдущий ещё идёт
        """
        if self._lock.locked():
            logger.warning(f"⚠️ {self.name} is still busy, skipping this run")
            return False

        async with self._lock:
            try:
                await self.action()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"❌ Error in {self.name}: {e}", exc_info=True)
        return True

    async def _loop(self) -> None:
        """Основной цикл."""
        if self.run_at_start:
            await self.run_once()

        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                await self.run_once()

    async def __aenter__(self) -> "RepeatingTask":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
