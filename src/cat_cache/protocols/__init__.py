"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (filesystem -> object storage, etc.)
- Unit testing with in-memory fakes
- Clear separation of concerns

Usage:
    ```python
    from cat_cache.protocols import CacheStore, OriginFetcher

    store: CacheStore = FileCacheRepository(cache_dir)
    origin: OriginFetcher = HttpOriginFetcher.create()
    ```
"""

from .cache_store import CacheStore
from .origin_fetcher import OriginFetcher

__all__ = [
    "CacheStore",
    "OriginFetcher",
]
