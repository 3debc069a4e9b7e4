"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity, CacheKey
from .generation_result import ErrorKind, GenerationResult

__all__ = ["CacheKey", "CacheEntryEntity", "ErrorKind", "GenerationResult"]
