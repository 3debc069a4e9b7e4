"""Shared pytest fixtures for Sketch Cache tests."""

import fnmatch
from collections.abc import AsyncIterator
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from sketch_cache.api.app import create_app
from sketch_cache.entities import CacheEntryEntity, CacheKey
from sketch_cache.errors import CacheUnavailableError, ImageGenerationError
from sketch_cache.handlers import ImageHandler
from sketch_cache.services import ImageService

SAFETY_ERROR_TEXT = (
    '400 Bad Request: {"error": {"code": "content_policy_violation", '
    '"message": "Your request was rejected as a result of our safety system."}}'
)


class InMemoryImageCacheStore:
    """Dict-backed ImageCacheStore with switchable failures."""

    def __init__(self) -> None:
        self.entries: dict[CacheKey, CacheEntryEntity] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.get_calls = 0
        self.set_calls = 0

    async def get(self, key: CacheKey) -> CacheEntryEntity | None:
        self.get_calls += 1
        if self.fail_reads:
            raise CacheUnavailableError("cache unavailable")
        return self.entries.get(key)

    async def set(self, key: CacheKey, image_url: str) -> None:
        self.set_calls += 1
        if self.fail_writes:
            raise CacheUnavailableError("cache unavailable")
        self.entries[key] = CacheEntryEntity(key=key, image_url=image_url, created_at=datetime.now(timezone.utc))

    async def delete(self, key: CacheKey) -> bool:
        if self.fail_writes:
            raise CacheUnavailableError("cache unavailable")
        return self.entries.pop(key, None) is not None

    async def clear(self) -> int:
        if self.fail_writes:
            raise CacheUnavailableError("cache unavailable")
        count = len(self.entries)
        self.entries.clear()
        return count

    async def health_check(self) -> bool:
        return not self.fail_reads


class FakeImageGenerator:
    """ImageGenerator that records prompts and returns canned results."""

    def __init__(self, image_url: str = "https://images.example.com/sketch.png") -> None:
        self.image_url = image_url
        self.error: Exception | None = None
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.image_url

    @property
    def calls(self) -> int:
        return len(self.prompts)


class FakeAsyncRedis:
    """The subset of redis.asyncio.Redis used by RedisImageCacheRepository."""

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = {}

    async def hgetall(self, name: str) -> dict[str, str]:
        return dict(self.hashes.get(name, {}))

    async def hset(self, name: str, mapping: dict[str, str]) -> int:
        existing = self.hashes.setdefault(name, {})
        added = sum(1 for field in mapping if field not in existing)
        existing.update(mapping)
        return added

    async def delete(self, *names: str) -> int:
        return sum(1 for name in names if self.hashes.pop(name, None) is not None)

    async def scan_iter(self, match: str = "*", count: int | None = None) -> AsyncIterator[str]:
        for name in list(self.hashes):
            if fnmatch.fnmatchcase(name, match):
                yield name

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        return None


@pytest.fixture
def cat_key() -> CacheKey:
    """A typical lookup key."""
    return CacheKey(word="cat", part_of_speech="noun", definition="a small domesticated feline")


@pytest.fixture
def store() -> InMemoryImageCacheStore:
    return InMemoryImageCacheStore()


@pytest.fixture
def generator() -> FakeImageGenerator:
    return FakeImageGenerator()


@pytest.fixture
def image_service(store: InMemoryImageCacheStore, generator: FakeImageGenerator) -> ImageService:
    return ImageService(store=store, generator=generator)


@pytest.fixture
def test_client(image_service: ImageService) -> TestClient:
    """Create a test client backed by in-memory fakes, admin routes enabled."""
    app = create_app(image_handler=ImageHandler(image_service=image_service), admin_routes=True, static_dir="")
    return TestClient(app)


@pytest.fixture
def fake_redis() -> FakeAsyncRedis:
    return FakeAsyncRedis()


@pytest.fixture
def safety_error() -> ImageGenerationError:
    return ImageGenerationError(SAFETY_ERROR_TEXT)
