"""
Общие фикстуры для тестов.
"""
import json
from typing import Any, AsyncGenerator, Dict, List, Union

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from blocklist_sync.domain import DomainBlock, RemoteDomainBlock, Severity
from blocklist_sync.services.mastodon_client import MastodonClient


ACCESS_TOKEN = "test-token"


# ═══════════════════════════════════════════════════════════════════════════════
# FAKE MASTODON
# ═══════════════════════════════════════════════════════════════════════════════

class FakeMastodon:
    """In-memory /api/v1/admin/domain_blocks с журналом вызовов."""

    def __init__(self):
        self.blocks: Dict[str, Dict[str, Any]] = {}
        self.calls: List[tuple] = []
        self.fail_on: Dict[tuple, int] = {}
        self.page_size = 0
        self._next_id = 1

    def add(self, domain: str, severity: str = "suspend", reject_media: bool = False,
            reject_reports: bool = False, public_comment: str = "") -> str:
        block_id = str(self._next_id)
        self._next_id += 1
        self.blocks[block_id] = {
            "id": block_id,
            "domain": domain,
            "severity": severity,
            "reject_media": reject_media,
            "reject_reports": reject_reports,
            "public_comment": public_comment,
        }
        return block_id

    def mutations(self) -> List[tuple]:
        return [c for c in self.calls if c[0] != "GET"]

    def _check_auth(self, request: web.Request) -> None:
        if request.headers.get("Authorization") != f"Bearer {ACCESS_TOKEN}":
            raise web.HTTPUnauthorized(text='{"error":"The access token is invalid"}')

    async def list_blocks(self, request: web.Request) -> web.Response:
        self._check_auth(request)
        self.calls.append(("GET", dict(request.query)))
        items = sorted(self.blocks.values(), key=lambda b: int(b["id"]))
        headers = {}
        if self.page_size:
            max_id = int(request.query.get("max_id", "0"))
            if max_id:
                items = [b for b in items if int(b["id"]) > max_id]
            if len(items) > self.page_size:
                items = items[: self.page_size]
                next_url = request.url.with_query({"limit": str(self.page_size), "max_id": items[-1]["id"]})
                headers["Link"] = f'<{next_url}>; rel="next"'
        return web.json_response(items, headers=headers)

    def _error(self, method: str, key: str):
        status = self.fail_on.get((method, key))
        if status:
            return web.json_response({"error": "Validation failed"}, status=status)
        return None

    async def create_block(self, request: web.Request) -> web.Response:
        self._check_auth(request)
        form = dict(await request.post())
        self.calls.append(("POST", form))
        error = self._error("POST", form.get("domain"))
        if error is not None:
            return error
        block_id = self.add(
            form["domain"],
            severity=form["severity"],
            reject_media=form["reject_media"] == "true",
            reject_reports=form["reject_reports"] == "true",
            public_comment=form["public_comment"],
        )
        return web.json_response(self.blocks[block_id])

    async def update_block(self, request: web.Request) -> web.Response:
        self._check_auth(request)
        block_id = request.match_info["id"]
        form = dict(await request.post())
        self.calls.append(("PUT", block_id, form))
        error = self._error("PUT", block_id)
        if error is not None:
            return error
        if block_id not in self.blocks:
            return web.json_response({"error": "Record not found"}, status=404)
        block = self.blocks[block_id]
        block["severity"] = form["severity"]
        block["reject_media"] = form["reject_media"] == "true"
        block["reject_reports"] = form["reject_reports"] == "true"
        block["public_comment"] = form["public_comment"]
        return web.json_response(block)

    async def delete_block(self, request: web.Request) -> web.Response:
        self._check_auth(request)
        block_id = request.match_info["id"]
        self.calls.append(("DELETE", block_id))
        error = self._error("DELETE", block_id)
        if error is not None:
            return error
        if self.blocks.pop(block_id, None) is None:
            return web.json_response({"error": "Record not found"}, status=404)
        return web.json_response({})

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/api/v1/admin/domain_blocks", self.list_blocks)
        app.router.add_post("/api/v1/admin/domain_blocks", self.create_block)
        app.router.add_put("/api/v1/admin/domain_blocks/{id}", self.update_block)
        app.router.add_delete("/api/v1/admin/domain_blocks/{id}", self.delete_block)
        return app


@pytest.fixture
def fake_mastodon() -> FakeMastodon:
    return FakeMastodon()


@pytest.fixture
async def mastodon_server(fake_mastodon: FakeMastodon) -> AsyncGenerator[TestServer, None]:
    """Поднятый fake Mastodon."""
    server = TestServer(fake_mastodon.make_app())
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
async def mastodon_client(mastodon_server: TestServer) -> AsyncGenerator[MastodonClient, None]:
    """MastodonClient, направленный на fake сервер."""
    client = MastodonClient(f"http://{mastodon_server.host}:{mastodon_server.port}/", ACCESS_TOKEN, timeout=5)
    yield client
    await client.close()


# ═══════════════════════════════════════════════════════════════════════════════
# FEED FIXTURES
# ═══════════════════════════════════════════════════════════════════════════════

class FakeFeed:
    """Отдаёт блоклист по /blocklist.json."""

    def __init__(self):
        self.body: Union[str, bytes] = json.dumps({"domain_blocks": []})
        self.status = 200

    def set_data(self, data: Any) -> None:
        self.body = json.dumps(data)

    async def handle(self, request: web.Request) -> web.Response:
        body = self.body.encode("utf-8") if isinstance(self.body, str) else self.body
        return web.Response(body=body, status=self.status, content_type="application/json")

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/blocklist.json", self.handle)
        return app


@pytest.fixture
def fake_feed() -> FakeFeed:
    return FakeFeed()


@pytest.fixture
async def feed_server(fake_feed: FakeFeed) -> AsyncGenerator[TestServer, None]:
    server = TestServer(fake_feed.make_app())
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def feed_url(feed_server: TestServer) -> str:
    return f"http://{feed_server.host}:{feed_server.port}/blocklist.json"


@pytest.fixture
def sample_feed() -> Dict[str, Any]:
    """Блоклист с дубликатами, мусором и пустыми правилами."""
    return {
        "domain_blocks": [
            {
                "domains": ["Spam.Example", " bad.example ", "localhost"],
                "severity": "silence",
                "reject_media": True,
                "reason": "spam",
            },
            {"domains": [], "severity": "suspend"},
            {
                "domains": ["bad.example", "worse.example"],
                "severity": "suspend",
                "reject_reports": True,
                "reason": "harassment",
            },
            {"domains": ["weird.example"], "severity": "nuke"},
        ]
    }


# ═══════════════════════════════════════════════════════════════════════════════
# TEST DATA FIXTURES
# ═══════════════════════════════════════════════════════════════════════════════

def remote(block_id: str, domain: str, severity: Severity = Severity.SUSPEND, **kwargs) -> RemoteDomainBlock:
    """RemoteDomainBlock для тестов."""
    return RemoteDomainBlock(id=block_id, block=DomainBlock(domain=domain, severity=severity, **kwargs))


@pytest.fixture
def make_remote():
    """Фабрика RemoteDomainBlock."""
    return remote


@pytest.fixture
def desired_blocks() -> List[DomainBlock]:
    return [
        DomainBlock("new.example", Severity.SUSPEND, reject_media=True, public_comment="new"),
        DomainBlock("changed.example", Severity.SILENCE, public_comment="changed"),
        DomainBlock("same.example", Severity.SUSPEND, reject_reports=True, public_comment="same"),
    ]


@pytest.fixture
def current_blocks() -> Dict[str, RemoteDomainBlock]:
    return {
        "changed.example": remote("7", "changed.example", Severity.SUSPEND, public_comment="changed"),
        "same.example": remote("8", "same.example", Severity.SUSPEND, reject_reports=True, public_comment="same"),
        "old.example": remote("3", "old.example"),
    }
