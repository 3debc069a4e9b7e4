"""Outcome of an image request."""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories surfaced to API clients."""

    VALIDATION = "validation"
    CACHE_UNAVAILABLE = "cache_unavailable"
    NOT_FOUND = "not_found"
    CONTENT_POLICY = "content_policy"
    GENERATOR_FAILURE = "generator_failure"
    CONFIGURATION = "configuration"


@dataclass(frozen=True)
class GenerationResult:
    """Success carrying an image URL, or failure carrying an error kind.

    Attributes:
        image_url: Locator of the image (empty on failure)
        error_kind: Failure category, None on success
        message: User-facing failure message, None on success
        from_cache: Whether the image came from the cache
    """

    image_url: str = ""
    error_kind: ErrorKind | None = None
    message: str | None = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, image_url: str, from_cache: bool = False) -> "GenerationResult":
        return cls(image_url=image_url, from_cache=from_cache)

    @classmethod
    def failure(cls, error_kind: ErrorKind, message: str) -> "GenerationResult":
        return cls(error_kind=error_kind, message=message)
