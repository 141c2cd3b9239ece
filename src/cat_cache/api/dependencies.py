"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Settings (and optional injected backends) stored in app.state by
      create_app
    - Services built and stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - No global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from cat_cache.config import Settings
from cat_cache.handlers import ImageHandler
from cat_cache.protocols import CacheStore, OriginFetcher
from cat_cache.repositories import FileCacheRepository, HttpOriginFetcher
from cat_cache.services import ImageCacheService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> ImageHandler:
    """Dependency injection for ImageHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "image_handler", None)
    if handler is None:
        raise RuntimeError("ImageHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Cache store - injected, or a FileCacheRepository on settings.cache_dir
    2. Origin fetcher - injected, or an HttpOriginFetcher on settings.origin_base_url
    3. Service (business logic) - stored in app.state.image_service
    4. Handler (HTTP endpoints) - stored in app.state.image_handler

    Raises:
        StorageError: If the cache directory cannot be prepared
    """
    settings: Settings = app.state.settings

    store: CacheStore | None = getattr(app.state, "cache_store", None)
    if store is None:
        store = FileCacheRepository(settings.cache_dir)
    store.ensure_ready()

    origin: OriginFetcher | None = getattr(app.state, "origin_fetcher", None)
    if origin is None:
        origin = HttpOriginFetcher.create(
            base_url=settings.origin_base_url,
            timeout=settings.origin_timeout,
        )

    image_service = ImageCacheService.create(
        store=store,
        origin=origin,
        strict_reads=settings.strict_reads,
    )

    app.state.cache_store = store
    app.state.origin_fetcher = origin
    app.state.image_service = image_service
    app.state.image_handler = ImageHandler(image_service=image_service)

    logger.info("Cache dir: %s", settings.cache_dir)
    logger.info("Origin: %s (timeout %.1fs)", settings.origin_base_url, settings.origin_timeout)

    yield

    await origin.close()
    del app.state.image_handler
    del app.state.image_service
    logger.info("Image cache shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ImageHandler, Depends(get_handler)]