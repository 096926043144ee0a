"""Shared fixtures for content-api tests."""

import json
from pathlib import Path

import httpx
import pytest

from content_api.services.content_cache import ContentCache
from content_api.services.disk_cache import DiskCache
from content_api.services.remote import RemoteFetcher
from content_api.services.repository import ContentRepository

API_BASE_URL = "https://cms.test"


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset module-level singletons between tests."""
    yield

    from content_api.config import get_settings

    get_settings.cache_clear()

    import content_api.main as main_mod

    main_mod.app.dependency_overrides.clear()


@pytest.fixture
def mock_settings(monkeypatch, tmp_path):
    """Provide a Settings object with safe test defaults."""
    from content_api.config import Settings, get_settings

    test_settings = Settings(
        blog_api_base_url=API_BASE_URL,
        content_cache_dir=str(tmp_path),
        http_timeout=1.0,
        retry_failed_loads=False,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("content_api.config.get_settings", lambda: test_settings)
    monkeypatch.setattr("content_api.main.get_settings", lambda: test_settings)
    return test_settings


class UpstreamStub:
    """Route table for ``httpx.MockTransport`` that counts requests."""

    def __init__(self) -> None:
        self.routes: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def set(self, path: str, *, status: int = 200, json_body=None) -> None:
        self.routes[path] = httpx.Response(status, json=json_body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get(request.url.path)
        if response is None:
            return httpx.Response(404, json={"message": "not found"})
        return response

    def count(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path == path)


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def snapshot_dir(tmp_path) -> Path:
    return tmp_path


@pytest.fixture
def write_snapshot(snapshot_dir):
    """Write a raw JSON (or literal text) snapshot file into the cache dir."""

    def _write(file_name: str, payload=None, *, raw: str | None = None) -> Path:
        path = snapshot_dir / file_name
        path.write_text(raw if raw is not None else json.dumps(payload), "utf-8")
        return path

    return _write


@pytest.fixture
async def repository(snapshot_dir, upstream):
    """Repository over a temp snapshot dir and a stubbed upstream."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    repo = ContentRepository(
        cache=ContentCache(),
        disk=DiskCache(snapshot_dir),
        fetcher=RemoteFetcher(API_BASE_URL, client=client),
    )
    yield repo
    await repo.aclose()
