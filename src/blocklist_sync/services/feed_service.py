"""
Загрузка JSON-блоклиста.
"""
import asyncio
import json
import logging
from typing import List, Optional, Union

import aiohttp

from blocklist_sync.domain import BlockRule, FeedDecodeError, FeedFetchError

logger = logging.getLogger(__name__)


class BlocklistFeed:
    """Источник желаемого состояния: {"domain_blocks": [...]} по URL."""

    def __init__(self, url: str, timeout: float = 30.0):
        self.url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch(self) -> List[BlockRule]:
        """Скачивает и разбирает блоклист.

        Raises:
            FeedFetchError: сеть недоступна или ответ не 2xx
            FeedDecodeError: тело не JSON или нет списка domain_blocks
        """
        try:
            session = await self._get_session()
            async with session.get(self.url) as resp:
                body = await resp.read()
                if resp.status < 200 or resp.status > 299:
                    raise FeedFetchError(self.url, f"HTTP {resp.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FeedFetchError(self.url, str(e) or e.__class__.__name__) from e

        return self.parse(body)

    def parse(self, body: Union[bytes, str]) -> List[BlockRule]:
        try:
            data = json.loads(body)
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            raise FeedDecodeError(self.url, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise FeedDecodeError(self.url, "top-level value is not an object")
        entries = data.get("domain_blocks")
        if not isinstance(entries, list):
            raise FeedDecodeError(self.url, "'domain_blocks' is missing or not a list")

        # Мусорные записи отбрасываем молча
        rules = [BlockRule.from_dict(entry) for entry in entries if isinstance(entry, dict)]
        logger.debug(f"📄 Feed contains {len(rules)} block rules")
        return rules
