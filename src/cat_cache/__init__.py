"""HTTP Cat Cache - read-through/write-through image cache over HTTP.

Clients address images by a code in the URL path. GET serves from a local
directory cache, falling back to the upstream origin on a miss and
populating the cache afterwards. PUT overwrites, DELETE removes.

Layers:
    - protocols: Interface contracts (CacheStore, OriginFetcher)
    - repositories: Filesystem store and HTTP origin implementations
    - services: Retrieve/store/remove flows
    - handlers: HTTP status mapping
    - entities: Domain models (internal)
    - api: FastAPI application factory

Usage:
    ```python
    from cat_cache import Settings, create_app

    app = create_app(Settings(cache_dir="./cache"))
    ```

From the command line:
    ```
    python -m cat_cache -h 127.0.0.1 -p 8080 -c ./cache
    ```
"""

from cat_cache.api import create_app
from cat_cache.config import Settings, get_settings
from cat_cache.entities import ImageLookup, LookupSource
from cat_cache.errors import (
    CacheError,
    EntryNotFoundError,
    InvalidKeyError,
    StorageError,
    UpstreamError,
)
from cat_cache.handlers import ImageHandler
from cat_cache.keys import extract_key
from cat_cache.protocols import CacheStore, OriginFetcher
from cat_cache.repositories import FileCacheRepository, HttpOriginFetcher
from cat_cache.services import ImageCacheService

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Application
    "create_app",
    "extract_key",
    # Protocols (interfaces)
    "CacheStore",
    "OriginFetcher",
    # Services (business logic)
    "ImageCacheService",
    # Handlers (HTTP)
    "ImageHandler",
    # Repositories (data access)
    "FileCacheRepository",
    "HttpOriginFetcher",
    # Entities (domain models)
    "ImageLookup",
    "LookupSource",
    # Errors
    "CacheError",
    "EntryNotFoundError",
    "StorageError",
    "UpstreamError",
    "InvalidKeyError",
]
