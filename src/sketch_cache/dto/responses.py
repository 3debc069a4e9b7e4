"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ImageResponse(BaseModel):
    """Response DTO for image generation and cache lookups.

    On failure ``imageUrl`` is empty and ``error`` holds a user-safe message.
    """

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field("", alias="imageUrl", description="URL of the image")
    error: str | None = Field(None, description="User-facing error message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status, always 'healthy'")


class RouteNotFoundResponse(BaseModel):
    """Response DTO for unmatched API paths."""

    error: str = Field("Route not found", description="Error message")


class CacheDeleteResponse(BaseModel):
    """Response DTO for deleting a single cache entry."""

    deleted: bool = Field(..., description="Whether an entry was removed")


class CacheClearResponse(BaseModel):
    """Response DTO for clearing the cache."""

    model_config = ConfigDict(populate_by_name=True)

    deleted_count: int = Field(..., alias="deletedCount", description="Number of entries removed", ge=0)
