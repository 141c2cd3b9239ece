"""
Tests for the HTTP origin fetcher.
"""

import httpx
import pytest

from cat_cache.errors import UpstreamError
from cat_cache.repositories import HttpOriginFetcher


def make_fetcher(handler) -> HttpOriginFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpOriginFetcher("https://origin.test/", timeout=2.0, client=client)


def test_url_for_encodes_key_as_one_segment():
    fetcher = HttpOriginFetcher.create("https://origin.test")

    assert fetcher.url_for("418") == "https://origin.test/418"
    assert fetcher.url_for("a b/c") == "https://origin.test/a%20b%2Fc"
    assert fetcher.url_for("it's(ok)!*~") == "https://origin.test/it's(ok)!*~"


@pytest.mark.asyncio
async def test_fetch_returns_body():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, content=b"\xff\xd8 cat", headers={"content-type": "image/jpeg"})

    fetcher = make_fetcher(handler)

    assert await fetcher.fetch("418") == b"\xff\xd8 cat"
    assert requested == ["https://origin.test/418"]
    await fetcher.close()


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [404, 500, 503])
async def test_fetch_non_success_status(status_code):
    fetcher = make_fetcher(lambda request: httpx.Response(status_code, content=b"nope"))

    with pytest.raises(UpstreamError) as exc_info:
        await fetcher.fetch("999")

    assert exc_info.value.status_code == status_code
    assert exc_info.value.key == "999"


@pytest.mark.asyncio
async def test_fetch_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = make_fetcher(handler)

    with pytest.raises(UpstreamError) as exc_info:
        await fetcher.fetch("418")

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_fetch_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    fetcher = make_fetcher(handler)

    with pytest.raises(UpstreamError) as exc_info:
        await fetcher.fetch("418")

    assert "timed out" in exc_info.value.reason


@pytest.mark.asyncio
async def test_default_client_is_lazy_and_closable():
    fetcher = HttpOriginFetcher.create("https://origin.test", timeout=3.0)

    client = fetcher.client
    assert client is fetcher.client
    assert client.follow_redirects is True
    assert client.timeout.read == 3.0

    await fetcher.close()
    assert client.is_closed
    await fetcher.close()
