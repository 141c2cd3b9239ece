"""Origin fetcher protocol.

Defines the interface for retrieving a blob from the upstream service,
keyed by the same string used for the cache.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class OriginFetcher(Protocol):
    """Protocol for upstream blob sources."""

    async def fetch(self, key: str) -> bytes:
        """Retrieve the blob for a key from the origin.

        Args:
            key: The cache key, used verbatim as the origin's resource id

        Returns:
            The response body

        Raises:
            UpstreamError: On network failure, timeout or non-success status
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
