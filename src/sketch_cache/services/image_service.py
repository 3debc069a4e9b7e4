"""Image service for core business logic.

This service orchestrates a request by coordinating the cache store
(data access) and the image generator (remote API).
"""

import logging

from sketch_cache.entities import CacheKey, ErrorKind, GenerationResult
from sketch_cache.errors import CacheUnavailableError, ConfigurationError, ImageGenerationError
from sketch_cache.prompt_builder import build_prompt
from sketch_cache.protocols import ImageCacheStore, ImageGenerator

from .error_classifier import SAFETY_REJECTION_MESSAGE, ErrorClassifier, is_content_policy_rejection

logger = logging.getLogger(__name__)

CACHE_UNAVAILABLE_MESSAGE = "cache unavailable"
NOT_FOUND_MESSAGE = "Image not found in cache"
GENERATION_FAILED_MESSAGE = "failed to generate image"


def missing_fields(key: CacheKey) -> list[str]:
    """Return the names of required fields that are empty."""
    missing = []
    if not key.word:
        missing.append("word")
    if not key.definition:
        missing.append("definition")
    return missing


class ImageService:
    """Core image orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - ImageCacheStore: can be Redis, MongoDB, in-memory, etc.
    - ImageGenerator: can be OpenAI or any other provider

    It holds no per-request state, so one instance serves all concurrent
    requests.

    Example:
        ```python
        from sketch_cache.repositories import OpenAIImageProvider, RedisImageCacheRepository
        from sketch_cache.services import ImageService

        service = ImageService.create(
            store=RedisImageCacheRepository.create(),
            generator=OpenAIImageProvider.create(),
        )
        result = await service.generate_image(CacheKey("cat", "noun", "a small feline"))
        ```
    """

    def __init__(
        self,
        store: ImageCacheStore,
        generator: ImageGenerator,
        classifier: ErrorClassifier | None = None,
    ) -> None:
        """Initialize the image service.

        Args:
            store: Cache storage backend (required).
            generator: Remote image generator (required).
            classifier: Predicate deciding whether an upstream error text is a
                content-policy rejection. Defaults to is_content_policy_rejection.
        """
        self._store = store
        self._generator = generator
        self._classifier = classifier or is_content_policy_rejection

    @classmethod
    def create(
        cls,
        store: ImageCacheStore,
        generator: ImageGenerator,
        classifier: ErrorClassifier | None = None,
    ) -> "ImageService":
        """Factory method to create ImageService.

        Args:
            store: Cache storage backend (required).
            generator: Remote image generator (required).
            classifier: Optional content-policy classifier.

        Returns:
            Configured ImageService instance
        """
        return cls(store=store, generator=generator, classifier=classifier)

    async def generate_image(self, key: CacheKey) -> GenerationResult:
        """Return an image for a word, generating it on a cache miss.

        Business logic:
        1. Reject the request if word or definition is empty
        2. Serve a cached image if one exists for the exact key
        3. Otherwise generate one and write it to the cache
        4. Classify generator failures

        A failed cache write after a successful generation is logged and
        does not fail the request.

        Args:
            key: The requested triple

        Returns:
            GenerationResult with the image URL or a typed failure
        """
        invalid = self._validate(key)
        if invalid is not None:
            return invalid

        try:
            entry = await self._store.get(key)
        except CacheUnavailableError:
            return GenerationResult.failure(ErrorKind.CACHE_UNAVAILABLE, CACHE_UNAVAILABLE_MESSAGE)

        if entry is not None:
            logger.info("Serving cached image for word: %s", key.word)
            return GenerationResult.success(entry.image_url, from_cache=True)

        logger.info("Generating image for word: %s (%s)", key.word, key.part_of_speech)
        prompt = build_prompt(key)
        logger.debug("Image prompt: %s", prompt)

        try:
            image_url = await self._generator.generate(prompt)
        except ConfigurationError as e:
            logger.error("Image generator misconfigured: %s", e)
            return GenerationResult.failure(ErrorKind.CONFIGURATION, str(e))
        except ImageGenerationError as e:
            logger.error("Failed to generate image: %s", e)
            if self._classifier(str(e)):
                logger.warning("Content policy violation for word: %s", key.word)
                return GenerationResult.failure(ErrorKind.CONTENT_POLICY, SAFETY_REJECTION_MESSAGE)
            return GenerationResult.failure(ErrorKind.GENERATOR_FAILURE, GENERATION_FAILED_MESSAGE)

        logger.info("Successfully generated image for word: %s", key.word)

        try:
            await self._store.set(key, image_url)
        except CacheUnavailableError as e:
            logger.error("Failed to cache image for word %s: %s", key.word, e)

        return GenerationResult.success(image_url)

    async def lookup(self, key: CacheKey) -> GenerationResult:
        """Return the cached image for a key without generating anything.

        Args:
            key: The requested triple

        Returns:
            GenerationResult with the cached URL, or a NOT_FOUND /
            VALIDATION / CACHE_UNAVAILABLE failure
        """
        invalid = self._validate(key)
        if invalid is not None:
            return invalid

        try:
            entry = await self._store.get(key)
        except CacheUnavailableError:
            return GenerationResult.failure(ErrorKind.CACHE_UNAVAILABLE, CACHE_UNAVAILABLE_MESSAGE)

        if entry is None:
            return GenerationResult.failure(ErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE)
        return GenerationResult.success(entry.image_url, from_cache=True)

    async def delete(self, key: CacheKey) -> bool:
        """Delete the cache entry for a key.

        Returns:
            True if an entry was removed

        Raises:
            CacheUnavailableError: If the store fails
        """
        return await self._store.delete(key)

    async def clear(self) -> int:
        """Clear all cache entries.

        Returns:
            Number of entries deleted

        Raises:
            CacheUnavailableError: If the store fails
        """
        return await self._store.clear()

    def _validate(self, key: CacheKey) -> GenerationResult | None:
        missing = missing_fields(key)
        if not missing:
            return None
        logger.warning("Invalid request - missing required fields: %s", ", ".join(missing))
        return GenerationResult.failure(
            ErrorKind.VALIDATION,
            f"Missing required field(s): {', '.join(missing)}",
        )
