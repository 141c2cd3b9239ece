"""
Shared fixtures: in-memory fakes for the cache store and the origin.
"""

import pytest
from fastapi.testclient import TestClient

from cat_cache.api import create_app
from cat_cache.config import Settings
from cat_cache.errors import EntryNotFoundError, StorageError, UpstreamError
from cat_cache.services import ImageCacheService


class InMemoryCacheStore:
    """Dict-backed CacheStore with switchable failures."""

    def __init__(self):
        self.entries: dict[str, bytes] = {}
        self.ready_calls = 0
        self.fail_reads = False
        self.fail_writes = False
        self.fail_deletes = False

    def ensure_ready(self) -> None:
        self.ready_calls += 1

    async def get(self, key: str) -> bytes:
        if self.fail_reads:
            raise StorageError(f"read failed for {key}")
        if key not in self.entries:
            raise EntryNotFoundError(key)
        return self.entries[key]

    async def put(self, key: str, blob: bytes) -> None:
        if self.fail_writes:
            raise StorageError(f"disk full writing {key}")
        self.entries[key] = blob

    async def delete(self, key: str) -> None:
        if self.fail_deletes:
            raise StorageError(f"permission denied deleting {key}")
        if key not in self.entries:
            raise EntryNotFoundError(key)
        del self.entries[key]


class FakeOrigin:
    """OriginFetcher serving a fixed dict, or nothing when unreachable."""

    def __init__(self):
        self.blobs: dict[str, bytes] = {}
        self.reachable = True
        self.calls: list[str] = []
        self.closed = False

    async def fetch(self, key: str) -> bytes:
        self.calls.append(key)
        if not self.reachable:
            raise UpstreamError(key, "connection refused")
        if key not in self.blobs:
            raise UpstreamError(key, "origin returned 404", status_code=404)
        return self.blobs[key]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary cache dir and a fake origin URL."""
    return Settings(
        host="127.0.0.1",
        port=8080,
        cache_dir=tmp_path / "cache",
        origin_base_url="https://origin.test",
    )


@pytest.fixture
def store():
    """Create an empty in-memory cache store."""
    return InMemoryCacheStore()


@pytest.fixture
def origin():
    """Create a fake origin with nothing on it."""
    return FakeOrigin()


@pytest.fixture
def service(store, origin):
    """Create a lenient service over the fakes."""
    return ImageCacheService.create(store=store, origin=origin)


@pytest.fixture
def app(settings, store, origin):
    """Create the application with fakes injected."""
    return create_app(settings, cache_store=store, origin_fetcher=origin)


@pytest.fixture
def client(app):
    """Create a test client with the lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
