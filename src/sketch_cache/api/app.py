"""Sketch Cache HTTP API.

Endpoints
---------
========  ======================  ==========================================
Method    Path                    Purpose
========  ======================  ==========================================
POST      ``/api/generate-image``  Cached-or-generated image for a word
GET       ``/api/cache``           Cached image only, 404 on a miss
GET       ``/api/health``          Liveness probe
DELETE    ``/api/cache``           Delete one entry (admin routes only)
DELETE    ``/api/cache/all``       Clear the cache (admin routes only)
========  ======================  ==========================================

Every error response is JSON. Errors on the image routes use the
``{"imageUrl": "", "error": ...}`` shape; unmatched paths return
``{"error": "Route not found"}``.
"""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from sketch_cache import __version__
from sketch_cache.api.dependencies import HandlerDep, lifespan
from sketch_cache.config import settings
from sketch_cache.dto import (
    CacheClearResponse,
    CacheDeleteResponse,
    GenerateImageRequest,
    HealthCheckResponse,
    ImageResponse,
    RouteNotFoundResponse,
)
from sketch_cache.handlers import ImageHandler

logger = logging.getLogger(__name__)

IMAGE_ROUTE_PATHS = frozenset({"/api/generate-image", "/api/cache", "/api/cache/all"})

WordParam = Annotated[str, Query(description="The word")]
PartOfSpeechParam = Annotated[str, Query(alias="partOfSpeech", description="Grammatical category")]
DefinitionParam = Annotated[str, Query(description="The definition")]

router = APIRouter(prefix="/api")
admin_router = APIRouter(prefix="/api")


@router.post("/generate-image", response_model=ImageResponse, response_model_exclude_none=True)
async def generate_image(request: GenerateImageRequest, handler: HandlerDep) -> ImageResponse:
    """Return an image for a word, generating and caching it on a miss."""
    return await handler.generate_image(request)


@router.get("/cache", response_model=ImageResponse, response_model_exclude_none=True)
async def lookup_cache(
    handler: HandlerDep,
    word: WordParam = "",
    part_of_speech: PartOfSpeechParam = "",
    definition: DefinitionParam = "",
) -> ImageResponse:
    """Return the cached image for a word without generating one."""
    return await handler.lookup_cache(word, part_of_speech, definition)


@router.get("/health", response_model=HealthCheckResponse)
async def health() -> HealthCheckResponse:
    """Health check endpoint."""
    logger.debug("Health check request received")
    return HealthCheckResponse(status="healthy")


@admin_router.delete("/cache", response_model=CacheDeleteResponse)
async def delete_cache_entry(
    handler: HandlerDep,
    word: WordParam = "",
    part_of_speech: PartOfSpeechParam = "",
    definition: DefinitionParam = "",
) -> CacheDeleteResponse:
    """Delete the cache entry for an exact word/part of speech/definition."""
    return await handler.delete_cache_entry(word, part_of_speech, definition)


@admin_router.delete("/cache/all", response_model=CacheClearResponse)
async def clear_cache(handler: HandlerDep) -> CacheClearResponse:
    """Clear every cache entry."""
    return await handler.clear_cache()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as JSON bodies."""
    path = request.url.path
    if path in IMAGE_ROUTE_PATHS:
        content = ImageResponse(error=str(exc.detail)).model_dump(by_alias=True)
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.warning("404 Not Found: %s", path)
        content = RouteNotFoundResponse().model_dump()
    else:
        content = {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed request bodies with a 400 instead of FastAPI's 422."""
    logger.warning("Invalid request body for %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ImageResponse(error="Invalid request body").model_dump(by_alias=True),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keep unexpected failures JSON-shaped and free of internal detail."""
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app(
    image_handler: ImageHandler | None = None,
    admin_routes: bool | None = None,
    static_dir: str | Path | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        image_handler: Pre-built handler. When given, the lifespan builds no
            Redis or OpenAI clients (used by tests).
        admin_routes: Register the DELETE routes. Defaults to
            settings.cache_admin_enabled.
        static_dir: Directory of a built frontend to serve at ``/``.
            Defaults to settings.static_dir; ignored if it does not exist.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Sketch Cache API",
        description="Cached AI sketches for dictionary words",
        version=__version__,
        lifespan=lifespan,
    )

    if image_handler is not None:
        app.state.image_handler = image_handler

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(router)

    if admin_routes if admin_routes is not None else settings.cache_admin_enabled:
        app.include_router(admin_router)

    static_path = static_dir if static_dir is not None else settings.static_dir
    if static_path and Path(static_path).is_dir():
        app.mount("/", StaticFiles(directory=static_path, html=True), name="frontend")

    return app


app = create_app()


def main() -> None:
    """Launch the uvicorn ASGI server.

    Registered as the ``sketch-cache`` console script in ``pyproject.toml``.
    """
    import uvicorn

    uvicorn.run(
        "sketch_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
