"""HTTP handlers for image operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error responses.
"""

import logging

from fastapi import HTTPException, status

from sketch_cache.dto import CacheClearResponse, CacheDeleteResponse, GenerateImageRequest, ImageResponse
from sketch_cache.entities import CacheKey, ErrorKind, GenerationResult
from sketch_cache.errors import CacheUnavailableError
from sketch_cache.services import ImageService

logger = logging.getLogger(__name__)

STATUS_BY_ERROR_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONTENT_POLICY: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CACHE_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.GENERATOR_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ImageHandler:
    """HTTP handlers for image operations.

    This handler delegates business logic to ImageService and turns
    failed results into ``HTTPException`` with the matching status code.
    The application's exception handlers render those as JSON.

    Example:
        ```python
        handler = ImageHandler(image_service=service)

        @app.post("/api/generate-image", response_model=ImageResponse)
        async def generate_image(request: GenerateImageRequest):
            return await handler.generate_image(request)
        ```
    """

    def __init__(self, image_service: ImageService) -> None:
        """Initialize the image handler.

        Args:
            image_service: The image service for business logic (required).
        """
        self._images = image_service

    async def generate_image(self, request: GenerateImageRequest) -> ImageResponse:
        """Handle POST /api/generate-image requests.

        Args:
            request: The generate image request DTO

        Returns:
            ImageResponse with the image URL

        Raises:
            HTTPException: 400 for invalid or rejected requests, 500 otherwise
        """
        result = await self._images.generate_image(request.to_key())
        return self._to_response(result)

    async def lookup_cache(self, word: str, part_of_speech: str, definition: str) -> ImageResponse:
        """Handle GET /api/cache requests.

        Returns:
            ImageResponse with the cached image URL

        Raises:
            HTTPException: 400 for missing fields, 404 on a miss, 500 on store errors
        """
        logger.debug("Cache lookup request - Word: %s, PartOfSpeech: %s", word, part_of_speech)
        key = CacheKey(word=word, part_of_speech=part_of_speech, definition=definition)
        result = await self._images.lookup(key)
        return self._to_response(result)

    async def delete_cache_entry(self, word: str, part_of_speech: str, definition: str) -> CacheDeleteResponse:
        """Handle DELETE /api/cache requests.

        Returns:
            CacheDeleteResponse saying whether an entry was removed

        Raises:
            HTTPException: 400 for missing fields, 500 on store errors
        """
        if not word or not definition:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Word and definition are required",
            )

        key = CacheKey(word=word, part_of_speech=part_of_speech, definition=definition)
        try:
            deleted = await self._images.delete(key)
        except CacheUnavailableError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to delete cache entry",
            ) from e

        return CacheDeleteResponse(deleted=deleted)

    async def clear_cache(self) -> CacheClearResponse:
        """Handle DELETE /api/cache/all requests.

        Returns:
            CacheClearResponse with the number of entries removed
        """
        try:
            count = await self._images.clear()
        except CacheUnavailableError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to clear cache",
            ) from e

        return CacheClearResponse(deleted_count=count)

    @staticmethod
    def _to_response(result: GenerationResult) -> ImageResponse:
        if result.ok:
            return ImageResponse(image_url=result.image_url)

        raise HTTPException(
            status_code=STATUS_BY_ERROR_KIND[result.error_kind],
            detail=result.message,
        )
