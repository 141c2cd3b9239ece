"""Repository layer for data access.

This layer hides external dependencies (the filesystem, the upstream HTTP
origin) behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with in-memory fakes
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from cat_cache.protocols import CacheStore, OriginFetcher

from .file_repository import FileCacheRepository
from .http_origin import HttpOriginFetcher

__all__ = [
    "CacheStore",
    "OriginFetcher",
    "FileCacheRepository",
    "HttpOriginFetcher",
]
