"""
Чтение текущего состояния блокировок в Mastodon.
"""
import logging
from typing import Dict, Optional

from blocklist_sync.core.types import DomainName
from blocklist_sync.domain import MastodonApiError, RemoteDomainBlock, RemoteReadError
from blocklist_sync.services.mastodon_client import MastodonClient


class RemoteStateReader:
    """Загружает блокировки инстанса и индексирует их по домену."""

    def __init__(self, client: MastodonClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    async def read(self) -> Dict[DomainName, RemoteDomainBlock]:
        """
        Returns:
            Словарь domain -> RemoteDomainBlock

        Raises:
            RemoteReadError: если список не удалось получить или разобрать
        """
        try:
            blocks = await self.client.list_domain_blocks()
        except MastodonApiError as e:
            raise RemoteReadError(e.message) from e

        current = {block.domain: block for block in blocks}
        if len(current) != len(blocks):
            self.logger.warning(f"⚠️ Remote returned {len(blocks) - len(current)} duplicate domain blocks")
        return current
