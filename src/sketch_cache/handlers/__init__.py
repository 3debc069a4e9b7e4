"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .image_handler import STATUS_BY_ERROR_KIND, ImageHandler

__all__ = [
    "ImageHandler",
    "STATUS_BY_ERROR_KIND",
]
