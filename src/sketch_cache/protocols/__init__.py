"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → MongoDB, OpenAI → another provider)
- Unit testing with in-memory implementations
- Clear separation of concerns
"""

from .cache_store import ImageCacheStore
from .image_generator import ImageGenerator

__all__ = [
    "ImageCacheStore",
    "ImageGenerator",
]
