"""Image cache service for core business logic.

This service implements the read-through/write-through flows by
coordinating the cache store (local storage) and the origin fetcher
(upstream HTTP service).
"""

import logging

from cat_cache.entities import ImageLookup, LookupSource
from cat_cache.errors import EntryNotFoundError, StorageError, UpstreamError
from cat_cache.protocols import CacheStore, OriginFetcher

logger = logging.getLogger(__name__)


class ImageCacheService:
    """Core cache orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: a directory on disk, or an in-memory fake in tests
    - OriginFetcher: the upstream HTTP service, or a fake

    Populating the cache after an origin fetch is a separate step
    (``populate``) so the caller decides when it runs relative to the
    response. It never raises.

    Example:
        ```python
        service = ImageCacheService.create(
            store=FileCacheRepository.create("./cache"),
            origin=HttpOriginFetcher.create("https://http.cat"),
        )

        lookup = await service.retrieve("418")
        if lookup.needs_populate:
            await service.populate(lookup.key, lookup.blob)
        ```
    """

    def __init__(
        self,
        store: CacheStore,
        origin: OriginFetcher,
        strict_reads: bool = False,
    ) -> None:
        """Initialize the image cache service.

        Args:
            store: Cache storage backend (required).
            origin: Upstream fetcher consulted on a miss (required).
            strict_reads: If True, a storage read failure is raised instead of
                being treated as a cache miss.
        """
        self._store = store
        self._origin = origin
        self._strict_reads = strict_reads

    @classmethod
    def create(
        cls,
        store: CacheStore,
        origin: OriginFetcher,
        strict_reads: bool = False,
    ) -> "ImageCacheService":
        """Factory method to create ImageCacheService.

        Args:
            store: Cache storage backend (required).
            origin: Upstream fetcher (required).
            strict_reads: Raise on storage read failures instead of falling
                through to the origin.

        Returns:
            Configured ImageCacheService instance
        """
        return cls(store=store, origin=origin, strict_reads=strict_reads)

    async def retrieve(self, key: str) -> ImageLookup:
        """Get the blob for a key, from the cache or else from the origin.

        Business logic:
        1. Try the cache store
        2. On a miss (or, unless strict, a read failure) fetch from origin
        3. Return the blob with its source; populating is left to the caller

        Args:
            key: The cache key

        Returns:
            ImageLookup with the blob and where it came from

        Raises:
            EntryNotFoundError: If not cached and the origin can't provide it
            StorageError: On a read failure when strict_reads is set
        """
        try:
            blob = await self._store.get(key)
        except EntryNotFoundError:
            logger.info("GET %s - not in cache, fetching from origin", key)
        except StorageError as e:
            if self._strict_reads:
                raise
            logger.warning("GET %s - cache read failed, treating as miss: %s", key, e)
        else:
            logger.info("GET %s - from cache", key)
            return ImageLookup(key=key, blob=blob, source=LookupSource.CACHE)

        try:
            blob = await self._origin.fetch(key)
        except UpstreamError as e:
            logger.info("Fetch from origin failed: %s", e.reason)
            raise EntryNotFoundError(key) from e

        return ImageLookup(key=key, blob=blob, source=LookupSource.ORIGIN)

    async def populate(self, key: str, blob: bytes) -> bool:
        """Write a fetched blob into the cache, best-effort.

        Args:
            key: The cache key
            blob: The blob fetched from the origin

        Returns:
            True if the blob was stored, False if the write failed
        """
        try:
            await self._store.put(key, blob)
        except StorageError as e:
            logger.warning("Cannot write %s to cache: %s", key, e)
            return False

        logger.info("Saved %s to cache", key)
        return True

    async def store(self, key: str, blob: bytes) -> None:
        """Store a blob for a key, overwriting any previous one.

        Raises:
            StorageError: If the write fails
        """
        await self._store.put(key, blob)
        logger.info("PUT %s - saved to cache (%d bytes)", key, len(blob))

    async def remove(self, key: str) -> None:
        """Remove the cached blob for a key.

        Raises:
            EntryNotFoundError: If nothing is cached for the key
            StorageError: On any other failure
        """
        await self._store.delete(key)
        logger.info("DELETE %s - removed from cache", key)
