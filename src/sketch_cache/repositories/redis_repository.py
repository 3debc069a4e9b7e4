"""Redis implementation of ImageCacheStore.

Each entry is a Redis hash stored under ``{prefix}:{sha256 of the triple}``.
A single ``HSET`` writes every field of an entry, so an upsert is atomic on
the server and racing writers for the same triple end with exactly one
entry holding the last URL written. No locking is layered on top.
"""

import logging
from datetime import datetime, timezone

import redis.asyncio as redis
from redis.exceptions import RedisError

from sketch_cache.config import GLOB_CHARACTERS, get_redis_client, settings
from sketch_cache.entities import CacheEntryEntity, CacheKey
from sketch_cache.errors import CacheUnavailableError

logger = logging.getLogger(__name__)

_CLEAR_BATCH_SIZE = 500


class RedisImageCacheRepository:
    """Redis implementation using one hash per cached image.

    This class satisfies the ImageCacheStore protocol through structural
    typing - no explicit inheritance needed.

    Entries never expire; they are only removed through ``delete`` and
    ``clear``.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis image cache repository.

        Args:
            redis_client: Async Redis client instance. If None, creates default.
            key_prefix: Namespace for cache keys. If None, uses settings.

        Raises:
            ValueError: If the prefix contains SCAN glob characters
        """
        self._prefix = key_prefix or settings.cache_key_prefix
        if any(char in self._prefix for char in GLOB_CHARACTERS):
            raise ValueError(f"Cache key prefix must not contain glob characters: {self._prefix!r}")
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisImageCacheRepository":
        """Factory method to create RedisImageCacheRepository with defaults.

        Args:
            key_prefix: Redis key namespace. If None, uses settings.

        Returns:
            Configured RedisImageCacheRepository
        """
        return cls(key_prefix=key_prefix)

    def storage_key(self, key: CacheKey) -> str:
        """Return the Redis key an entry for ``key`` is stored under."""
        return f"{self._prefix}:{key.digest()}"

    async def get(self, key: CacheKey) -> CacheEntryEntity | None:
        """Fetch the entry for an exact key.

        Args:
            key: The triple to look up

        Returns:
            The cached entry, or None on a miss

        Raises:
            CacheUnavailableError: If Redis cannot be queried
        """
        try:
            data = await self._client.hgetall(self.storage_key(key))
        except RedisError as e:
            logger.error("Failed to get cache entry: %s", e)
            raise CacheUnavailableError("cache unavailable") from e

        if not data:
            logger.debug("Cache miss for word: %s", key.word)
            return None

        stored_key = CacheKey(
            word=data.get("word", ""),
            part_of_speech=data.get("partOfSpeech", ""),
            definition=data.get("definition", ""),
        )
        if stored_key != key or "imageUrl" not in data:
            logger.warning("Ignoring mismatched cache entry under %s", self.storage_key(key))
            return None

        logger.debug("Cache hit for word: %s", key.word)
        return CacheEntryEntity(
            key=stored_key,
            image_url=data["imageUrl"],
            created_at=_parse_timestamp(data.get("createdAt")),
        )

    async def set(self, key: CacheKey, image_url: str) -> None:
        """Insert or overwrite the entry for a key.

        Args:
            key: The triple the image was generated for
            image_url: Locator of the generated image

        Raises:
            CacheUnavailableError: If Redis rejects the write
        """
        mapping = {
            "word": key.word,
            "partOfSpeech": key.part_of_speech,
            "definition": key.definition,
            "imageUrl": image_url,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }

        try:
            added = await self._client.hset(self.storage_key(key), mapping=mapping)
        except RedisError as e:
            logger.error("Failed to set cache entry: %s", e)
            raise CacheUnavailableError("cache unavailable") from e

        # HSET reports newly created fields; zero means every field existed.
        if added:
            logger.info("Created new cache entry for word: %s", key.word)
        else:
            logger.info("Updated existing cache entry for word: %s", key.word)

    async def delete(self, key: CacheKey) -> bool:
        """Delete the entry for a key.

        Args:
            key: The triple to delete

        Returns:
            True if deleted, False if there was nothing to delete

        Raises:
            CacheUnavailableError: If Redis rejects the delete
        """
        try:
            removed = await self._client.delete(self.storage_key(key))
        except RedisError as e:
            logger.error("Failed to delete cache entry: %s", e)
            raise CacheUnavailableError("cache unavailable") from e

        if removed:
            logger.info("Deleted cache entry for word: %s", key.word)
        else:
            logger.debug("No cache entry found to delete for word: %s", key.word)
        return removed > 0

    async def clear(self) -> int:
        """Clear all entries under the cache prefix.

        Returns:
            Number of entries deleted

        Raises:
            CacheUnavailableError: If Redis fails part way through
        """
        count = 0
        batch: list[str] = []
        try:
            async for storage_key in self._client.scan_iter(match=f"{self._prefix}:*", count=_CLEAR_BATCH_SIZE):
                batch.append(storage_key)
                if len(batch) >= _CLEAR_BATCH_SIZE:
                    count += await self._client.delete(*batch)
                    batch = []
            if batch:
                count += await self._client.delete(*batch)
        except RedisError as e:
            logger.error("Failed to clear cache: %s", e)
            raise CacheUnavailableError("cache unavailable") from e

        logger.info("Cleared %d entries from cache", count)
        return count

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("Redis health check failed: %s", e)
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()
        logger.info("Closed Redis connection")


def _parse_timestamp(value: str | None) -> datetime:
    if not value:
        return datetime.fromtimestamp(0, tz=timezone.utc)
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return datetime.fromtimestamp(0, tz=timezone.utc)
