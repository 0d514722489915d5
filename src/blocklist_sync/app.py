"""
Главный модуль сервиса с graceful shutdown.
"""
import asyncio
import logging
import signal
from typing import Optional

from blocklist_sync.config import Config, get_config
from blocklist_sync.logging_config import setup_logging
from blocklist_sync.services import (
    BlocklistFeed,
    MastodonClient,
    Reconciler,
    RemoteStateReader,
    RepeatingTask,
    SyncService,
)

logger = logging.getLogger(__name__)


class SyncApp:
    """Главный класс сервиса."""

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.client: Optional[MastodonClient] = None
        self.feed: Optional[BlocklistFeed] = None
        self.sync_service: Optional[SyncService] = None
        self.worker: Optional[RepeatingTask] = None
        self._shutdown_event = asyncio.Event()
        self._stopping = False

    def setup(self) -> None:
        """Собирает сервисы."""
        cfg = self.config
        self.client = MastodonClient(cfg.mastodon.base_url, cfg.mastodon.access_token, timeout=cfg.request_timeout)
        self.feed = BlocklistFeed(cfg.json_url, timeout=cfg.request_timeout)

        self.sync_service = SyncService(
            feed=self.feed,
            reader=RemoteStateReader(self.client, logger=self.logger.getChild("remote")),
            reconciler=Reconciler(self.client, dry_run=cfg.dry_run, logger=self.logger.getChild("reconciler")),
            logger=self.logger.getChild("sync"),
        )
        self.worker = RepeatingTask(
            interval=cfg.task_interval,
            action=self.sync_service.run_cycle,
            run_at_start=True,
            name="Synchronization worker",
        )

        if cfg.dry_run:
            self.logger.warning("⚠️ DRY_RUN is enabled: changes will be logged, not applied")
        self.logger.info("✅ Service initialized")

    async def run(self) -> None:
        """Запуск сервиса."""
        self.setup()

        # Graceful shutdown
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, lambda: asyncio.create_task(self.shutdown()))
            except NotImplementedError:
                signal.signal(sig, lambda s, f: loop.call_soon_threadsafe(lambda: asyncio.create_task(self.shutdown())))

        self.logger.info(f"🚀 Starting synchronization worker (interval: {self.config.task_interval:g}s)...")
        await self.worker.start()
        self.logger.info("The application has been started. To stop it press Ctrl-C.")

        await self._shutdown_event.wait()

    async def shutdown(self) -> None:
        """Graceful shutdown: текущий цикл дорабатывает, следующий не начинается."""
        if self._stopping:
            return
        self._stopping = True
        self.logger.info("🛑 Shutting down...")

        if self.worker:
            await self.worker.stop()

        if self.feed:
            await self.feed.close()

        if self.client:
            await self.client.close()

        self._shutdown_event.set()
        self.logger.info("👋 Service stopped")


def main() -> None:
    """Точка входа."""
    try:
        config = get_config()
    except ValueError as e:
        logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logger.error(f"❌ Config error: {e}")
        raise SystemExit(1)

    app_logger = setup_logging(config)
    try:
        asyncio.run(SyncApp(config, logger=app_logger).run())
    except KeyboardInterrupt:
        app_logger.info("👋 Interrupted")
    except Exception as e:
        app_logger.error(f"❌ Fatal: {e}")
        raise


if __name__ == "__main__":
    main()
