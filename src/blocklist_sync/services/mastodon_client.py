"""
Клиент Mastodon admin API для блокировок доменов.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from blocklist_sync.core.constants import DOMAIN_BLOCKS_PAGE_LIMIT, DOMAIN_BLOCKS_PATH
from blocklist_sync.core.types import BlockId
from blocklist_sync.domain import DomainBlock, MastodonApiError, RemoteDomainBlock

logger = logging.getLogger(__name__)


class MastodonClient:
    """Клиент /api/v1/admin/domain_blocks."""

    def __init__(self, base_url: str, access_token: str, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{DOMAIN_BLOCKS_PATH}"

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={"Authorization": f"Bearer {self._access_token}"},
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request(self, method: str, url: str, **kwargs) -> aiohttp.ClientResponse:
        """Выполняет запрос; не-2xx ответы и сетевые ошибки превращаются в MastodonApiError.

        Тело ответа прочитано до возврата, так что его можно разбирать после закрытия.
        """
        session = await self._get_session()
        try:
            async with session.request(method, url, **kwargs) as resp:
                body = await resp.read()
                if resp.status < 200 or resp.status > 299:
                    raise MastodonApiError(resp.status, body.decode("utf-8", errors="replace"))
                return resp
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise MastodonApiError(None, str(e) or e.__class__.__name__) from e

    async def list_domain_blocks(self) -> List[RemoteDomainBlock]:
        """Получает все блокировки доменов, проходя по страницам через Link: rel="next"."""
        blocks: List[RemoteDomainBlock] = []
        url: Optional[str] = self.endpoint
        params: Optional[Dict[str, Any]] = {"limit": DOMAIN_BLOCKS_PAGE_LIMIT}

        while url:
            resp = await self._request("GET", url, params=params)
            try:
                data = await resp.json(content_type=None)
            except ValueError as e:
                raise MastodonApiError(resp.status, f"invalid JSON in domain block list: {e}") from e
            if not isinstance(data, list):
                raise MastodonApiError(resp.status, f"expected a list of domain blocks, got {type(data).__name__}")

            for item in data:
                try:
                    blocks.append(RemoteDomainBlock.from_api(item))
                except ValueError as e:
                    raise MastodonApiError(resp.status, f"malformed domain block: {e}") from e

            next_link = resp.links.get("next")
            url = str(next_link["url"]) if next_link and data else None
            # next-ссылка уже содержит limit и max_id
            params = None

        logger.debug(f"📥 Loaded {len(blocks)} domain blocks from {self.base_url}")
        return blocks

    async def create_domain_block(self, block: DomainBlock) -> None:
        await self._request("POST", self.endpoint, data=block.to_form(include_domain=True))

    async def update_domain_block(self, block_id: BlockId, block: DomainBlock) -> None:
        await self._request("PUT", f"{self.endpoint}/{block_id}", data=block.to_form(include_domain=False))

    async def delete_domain_block(self, block_id: BlockId) -> None:
        await self._request("DELETE", f"{self.endpoint}/{block_id}")
