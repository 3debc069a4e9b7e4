"""Exceptions raised by repositories and consumed by the service layer."""


class SketchCacheError(Exception):
    """Base class for all sketch cache errors."""


class CacheUnavailableError(SketchCacheError):
    """The backing store could not complete an operation.

    A missing entry is never reported with this error.
    """


class ImageGenerationError(SketchCacheError):
    """The upstream image API failed or returned an unusable payload.

    The message carries the raw upstream status line and body so it can be
    classified; it must not be echoed to API clients.
    """


class ConfigurationError(SketchCacheError):
    """A required setting (such as the upstream API key) is missing."""
