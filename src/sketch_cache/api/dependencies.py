"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from sketch_cache.config import settings
from sketch_cache.handlers import ImageHandler
from sketch_cache.logging_config import configure_logging
from sketch_cache.repositories import OpenAIImageProvider, RedisImageCacheRepository
from sketch_cache.services import ImageService

logger = logging.getLogger(__name__)


def get_image_handler(request: Request) -> ImageHandler:
    """Dependency injection for ImageHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The ImageHandler instance from app.state

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

    Initializes all layers and stores in app.state:
    1. Repositories (Redis store, OpenAI generator) - created explicitly
    2. Service (business logic) - stored in app.state.image_service
    3. Handler (HTTP endpoints) - stored in app.state.image_handler

    If a handler was injected before startup (``create_app(image_handler=...)``)
    nothing is built and nothing is torn down.

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes the Redis and HTTP clients and removes them from app.state
    """
    if getattr(app.state, "image_handler", None) is not None:
        yield
        return

    log_file = configure_logging(settings.log_dir, debug=settings.is_development)
    logger.info("Starting Sketch Cache API, logging to %s", log_file)

    repository = RedisImageCacheRepository.create()
    if await repository.health_check():
        logger.info("Successfully connected to Redis at %s", settings.redis_url)
    else:
        logger.warning("Redis at %s is not reachable; cache requests will fail until it is", settings.redis_url)

    generator = OpenAIImageProvider.create()
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set; image generation requests will fail")

    image_service = ImageService.create(store=repository, generator=generator)
    image_handler = ImageHandler(image_service=image_service)

    # Store in app.state (FastAPI pattern)
    app.state.repository = repository
    app.state.generator = generator
    app.state.image_service = image_service
    app.state.image_handler = image_handler

    yield

    await generator.close()
    await repository.close()
    del app.state.image_handler
    del app.state.image_service
    del app.state.generator
    del app.state.repository
    logger.info("Sketch Cache API shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ImageHandler, Depends(get_image_handler)]
