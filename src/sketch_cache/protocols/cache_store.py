"""Image cache storage protocol.

Defines the interface for any store that maps an exact (word, part of
speech, definition) triple to a previously generated image URL.

Implementations can include:
- Redis (default)
- MongoDB or any document store with an atomic replace-with-upsert
- An in-memory dict (tests)
"""

from typing import Protocol, runtime_checkable

from sketch_cache.entities import CacheEntryEntity, CacheKey


@runtime_checkable
class ImageCacheStore(Protocol):
    """Protocol for image cache storage backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed. Operational failures are raised as
    ``CacheUnavailableError``; a missing entry is never an error.
    """

    async def get(self, key: CacheKey) -> CacheEntryEntity | None:
        """Look up the entry stored for an exact key.

        Args:
            key: The triple to look up

        Returns:
            The cached entry, or None on a miss
        """
        ...

    async def set(self, key: CacheKey, image_url: str) -> None:
        """Insert or overwrite the entry for a key.

        Concurrent calls for the same key must leave exactly one entry
        holding the last written URL.

        Args:
            key: The triple the image was generated for
            image_url: Locator of the generated image
        """
        ...

    async def delete(self, key: CacheKey) -> bool:
        """Delete the entry for a key. Missing keys are not an error.

        Args:
            key: The triple to delete

        Returns:
            True if an entry was removed, False otherwise
        """
        ...

    async def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries deleted
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
