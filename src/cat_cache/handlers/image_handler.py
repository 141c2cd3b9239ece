"""HTTP handlers for image cache operations.

Handlers turn a raw request path into a key, call the service and map its
outcomes onto status codes. Errors are raised as HTTPException and rendered
as plain text by the app's exception handlers.
"""

from fastapi import HTTPException, status
from fastapi.responses import PlainTextResponse, Response
from starlette.background import BackgroundTask

from cat_cache.errors import EntryNotFoundError, InvalidKeyError, StorageError
from cat_cache.keys import extract_key
from cat_cache.services import ImageCacheService

IMAGE_MEDIA_TYPE = "image/jpeg"


class ImageHandler:
    """HTTP handlers for image cache operations.

    Each method runs one request flow:
    key extraction -> service call -> response or HTTPException.

    Example:
        ```python
        handler = ImageHandler(image_service=service)

        @app.get("/{path:path}")
        async def retrieve(request: Request):
            return await handler.retrieve(request_path(request))
        ```
    """

    def __init__(self, image_service: ImageCacheService) -> None:
        """Initialize the image handler.

        Args:
            image_service: The service for business logic (required).
        """
        self._images = image_service

    def _key(self, raw_path: str) -> str:
        try:
            return extract_key(raw_path)
        except InvalidKeyError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    async def retrieve(self, raw_path: str) -> Response:
        """Handle GET /<code>.

        On a miss served from the origin, the cache write is attached as a
        background task: it starts only after the response has been sent,
        and its outcome never changes that response.

        Raises:
            HTTPException: 400 for an invalid key, 404 if unavailable,
                500 on a strict-mode read failure
        """
        key = self._key(raw_path)
        try:
            lookup = await self._images.retrieve(key)
        except InvalidKeyError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
        except EntryNotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found") from e
        except StorageError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal Server Error",
            ) from e

        background = None
        if lookup.needs_populate:
            background = BackgroundTask(self._images.populate, lookup.key, lookup.blob)

        return Response(
            content=lookup.blob,
            media_type=IMAGE_MEDIA_TYPE,
            background=background,
        )

    async def store(self, raw_path: str, body: bytes) -> PlainTextResponse:
        """Handle PUT /<code>.

        Raises:
            HTTPException: 400 for an invalid key, 500 if the write fails
        """
        key = self._key(raw_path)
        try:
            await self._images.store(key, body)
        except InvalidKeyError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
        except StorageError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal Server Error",
            ) from e

        return PlainTextResponse("Created", status_code=status.HTTP_201_CREATED)

    async def remove(self, raw_path: str) -> PlainTextResponse:
        """Handle DELETE /<code>.

        Raises:
            HTTPException: 400 for an invalid key, 404 if absent,
                500 on any other failure
        """
        key = self._key(raw_path)
        try:
            await self._images.remove(key)
        except InvalidKeyError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
        except EntryNotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found") from e
        except StorageError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal Server Error",
            ) from e

        return PlainTextResponse("Deleted")
