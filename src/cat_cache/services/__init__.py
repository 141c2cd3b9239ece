"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable with in-memory fakes.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from cat_cache.services import ImageCacheService

    service = ImageCacheService.create(store=store, origin=origin)
    lookup = await service.retrieve("418")
    ```
"""

from .image_cache_service import ImageCacheService

__all__ = [
    "ImageCacheService",
]
