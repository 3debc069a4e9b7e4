"""Sketch Cache - cached AI sketches for dictionary words.

Given a (word, part of speech, definition) triple, the service asks an
image-generation API for a simple sketch and caches the resulting URL so
the same triple never triggers a second paid generation.

Layers:
    - protocols: Interface contracts (ImageCacheStore, ImageGenerator)
    - repositories: Data access implementations (Redis, OpenAI)
    - services: Business logic
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

For HTTP API:
    ```python
    from sketch_cache.api.app import app
    ```
"""

__version__ = "0.1.0"

from sketch_cache.config import get_redis_client, settings
from sketch_cache.dto import GenerateImageRequest, ImageResponse
from sketch_cache.entities import CacheEntryEntity, CacheKey, ErrorKind, GenerationResult
from sketch_cache.handlers import ImageHandler
from sketch_cache.protocols import ImageCacheStore, ImageGenerator
from sketch_cache.repositories import OpenAIImageProvider, RedisImageCacheRepository
from sketch_cache.services import ImageService

__all__ = [
    "__version__",
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "ImageCacheStore",
    "ImageGenerator",
    # Services (business logic)
    "ImageService",
    # Handlers (HTTP)
    "ImageHandler",
    # Repositories (data access)
    "RedisImageCacheRepository",
    "OpenAIImageProvider",
    # Entities (domain models)
    "CacheKey",
    "CacheEntryEntity",
    "ErrorKind",
    "GenerationResult",
    # DTOs (API contracts)
    "GenerateImageRequest",
    "ImageResponse",
]
