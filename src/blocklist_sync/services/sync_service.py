"""
Один цикл синхронизации: блоклист -> санитизация -> развёртка -> текущее состояние -> сверка.
"""
import logging
from typing import Optional

from blocklist_sync.domain import (
    FeedDecodeError,
    FeedFetchError,
    RemoteMutationError,
    RemoteReadError,
    SyncReport,
)
from blocklist_sync.services.feed_service import BlocklistFeed
from blocklist_sync.services.reconciler import Reconciler
from blocklist_sync.services.remote_state import RemoteStateReader
from blocklist_sync.services.sanitizer import sanitize
from blocklist_sync.services.translator import translate


class SyncService:
    """Сервис синхронизации блокировок."""

    def __init__(
        self,
        feed: BlocklistFeed,
        reader: RemoteStateReader,
        reconciler: Reconciler,
        logger: Optional[logging.Logger] = None,
    ):
        self.feed = feed
        self.reader = reader
        self.reconciler = reconciler
        self.logger = logger or logging.getLogger(__name__)

    async def run_cycle(self) -> Optional[SyncReport]:
        """Выполняет цикл. Ошибки логируются, наружу не выходят.

        Returns:
            Отчёт о цикле или None, если цикл прерван ошибкой
        """
        self.logger.debug("🔄 Syncing data...")
        try:
            try:
                rules = await self.feed.fetch()
            except (FeedFetchError, FeedDecodeError) as e:
                self.logger.error(f"❌ Could not retrieve/parse JSON data: {e.message}")
                return None

            desired = translate(sanitize(rules))
            self.logger.debug(f"📋 {len(rules)} rules in feed, {len(desired)} domains desired")

            try:
                current = await self.reader.read()
            except RemoteReadError as e:
                self.logger.error(f"❌ Could not sync data: {e.message}")
                return None

            try:
                report = await self.reconciler.reconcile(desired, current)
            except RemoteMutationError as e:
                self.logger.error(
                    f"❌ Could not sync data: {e.message}",
                    extra={"action": str(e.action), "domain": e.domain},
                )
                return None
        finally:
            self.logger.debug("Finished syncing data.")

        if report.total_changes:
            self.logger.info(f"✅ Sync completed: {report.summary()}")
        else:
            self.logger.debug(f"✅ Nothing to change: {report.summary()}")
        return report
