"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the OpenAI Images API)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with in-memory implementations
- Clear separation of concerns
"""

from sketch_cache.protocols import ImageCacheStore, ImageGenerator

from .openai_image_provider import OpenAIImageProvider
from .redis_repository import RedisImageCacheRepository

__all__ = [
    "ImageCacheStore",
    "ImageGenerator",
    "OpenAIImageProvider",
    "RedisImageCacheRepository",
]
