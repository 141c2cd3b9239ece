import logging
from urllib.parse import quote, quote_from_bytes

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from cat_cache.api.dependencies import HandlerDep, lifespan
from cat_cache.config import Settings, get_settings
from cat_cache.protocols import CacheStore, OriginFetcher

logger = logging.getLogger(__name__)

# Printable ASCII passes through untouched, any other byte is escaped
PATH_SAFE = "".join(chr(code) for code in range(0x21, 0x7F))


def request_path(request: Request) -> str:
    """Return the request path still percent-encoded, without query string.

    Key extraction does its own decoding, so the path has to reach it
    undecoded or ``%25`` sequences would be decoded twice.
    """
    raw_path: bytes | None = request.scope.get("raw_path")
    if raw_path:
        return quote_from_bytes(raw_path.split(b"?", 1)[0], safe=PATH_SAFE)
    return quote(request.url.path)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> PlainTextResponse:
    """Render HTTP errors (including routing 405s) as plain text."""
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Last-resort handler: log and answer 500 if nothing was sent yet."""
    logger.error(
        "Unhandled error handling %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return PlainTextResponse(
        "Internal Server Error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def create_app(
    settings: Settings | None = None,
    cache_store: CacheStore | None = None,
    origin_fetcher: OriginFetcher | None = None,
) -> FastAPI:
    """Build the image cache application.

    Args:
        settings: Application settings. Defaults to the environment.
        cache_store: Storage backend override. Defaults to a directory store
            on ``settings.cache_dir``.
        origin_fetcher: Origin override. Defaults to an HTTP fetcher on
            ``settings.origin_base_url``.

    Returns:
        The FastAPI application
    """
    # The whole path space is keys: no docs or schema routes
    app = FastAPI(
        title="HTTP Cat Cache",
        description="Read-through/write-through image cache in front of an HTTP origin",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings or get_settings()
    app.state.cache_store = cache_store
    app.state.origin_fetcher = origin_fetcher

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/{path:path}")
    async def retrieve(request: Request, handler: HandlerDep) -> Response:
        """Return the image for a code, from cache or origin."""
        return await handler.retrieve(request_path(request))

    @app.put("/{path:path}")
    async def store(request: Request, handler: HandlerDep) -> Response:
        """Store the request body as the image for a code."""
        body = await request.body()
        return await handler.store(request_path(request), body)

    @app.delete("/{path:path}")
    async def remove(request: Request, handler: HandlerDep) -> Response:
        """Remove the cached image for a code."""
        return await handler.remove(request_path(request))

    return app
