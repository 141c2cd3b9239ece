"""HTTP implementation of OriginFetcher.

Retrieves blobs from a fixed upstream base URL (https://http.cat by default),
with the key percent-encoded as the final path segment.
"""

import logging
from urllib.parse import quote

import httpx

from cat_cache.errors import UpstreamError

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone besides the ones quote always keeps
URI_COMPONENT_SAFE = "!~*'()"


class HttpOriginFetcher:
    """httpx-based implementation of the OriginFetcher protocol.

    This class satisfies the OriginFetcher protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        origin = HttpOriginFetcher.create(base_url="https://http.cat", timeout=5.0)
        blob = await origin.fetch("418")
        await origin.close()
        ```
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the origin fetcher.

        Args:
            base_url: Upstream base URL, without trailing slash.
            timeout: Request timeout in seconds.
            client: Preconfigured client (mainly for tests). Created lazily
                if not given.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    @classmethod
    def create(cls, base_url: str, timeout: float = 10.0) -> "HttpOriginFetcher":
        """Factory method to create HttpOriginFetcher with defaults."""
        return cls(base_url=base_url, timeout=timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def base_url(self) -> str:
        """Get the upstream base URL."""
        return self._base_url

    def url_for(self, key: str) -> str:
        """Build the upstream URL for a key.

        The key is encoded the way JavaScript's ``encodeURIComponent`` does,
        so ``/`` inside a key becomes ``%2F``.
        """
        return f"{self._base_url}/{quote(key, safe=URI_COMPONENT_SAFE)}"

    async def fetch(self, key: str) -> bytes:
        """Fetch the blob for a key from the origin.

        Raises:
            UpstreamError: On transport error, timeout or non-2xx status
        """
        url = self.url_for(key)
        try:
            response = await self.client.get(url)
        except httpx.TimeoutException as e:
            raise UpstreamError(key, f"timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise UpstreamError(key, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise UpstreamError(
                key,
                f"{url} returned {response.status_code}",
                status_code=response.status_code,
            )

        logger.debug("Fetched %s (%d bytes)", url, len(response.content))
        return response.content

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
