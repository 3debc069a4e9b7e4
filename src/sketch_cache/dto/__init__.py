"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract. Field names are
snake_case in Python and camelCase on the wire.

Internal domain logic should use entities from the entities package.
"""

from .requests import GenerateImageRequest
from .responses import (
    CacheClearResponse,
    CacheDeleteResponse,
    HealthCheckResponse,
    ImageResponse,
    RouteNotFoundResponse,
)

__all__ = [
    "GenerateImageRequest",
    "ImageResponse",
    "HealthCheckResponse",
    "RouteNotFoundResponse",
    "CacheDeleteResponse",
    "CacheClearResponse",
]
