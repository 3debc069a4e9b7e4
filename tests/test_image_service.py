"""Tests for ImageService orchestration: validation, caching and error mapping."""

import asyncio

import pytest

from sketch_cache.entities import CacheKey, ErrorKind
from sketch_cache.errors import ConfigurationError, ImageGenerationError
from sketch_cache.services import SAFETY_REJECTION_MESSAGE, ImageService


class TestGenerateImage:
    """ImageService.generate_image"""

    @pytest.mark.asyncio
    async def test_miss_generates_and_caches(self, image_service, store, generator, cat_key):
        result = await image_service.generate_image(cat_key)

        assert result.ok
        assert result.image_url == generator.image_url
        assert not result.from_cache
        assert store.entries[cat_key].image_url == generator.image_url

    @pytest.mark.asyncio
    async def test_prompt_format(self, image_service, generator, cat_key):
        await image_service.generate_image(cat_key)

        assert generator.prompts == [
            "Please draw a simple sketch of this: cat (noun) a small domesticated feline"
        ]

    @pytest.mark.asyncio
    async def test_second_request_is_cache_hit(self, image_service, generator, cat_key):
        first = await image_service.generate_image(cat_key)
        second = await image_service.generate_image(cat_key)

        assert second.ok
        assert second.from_cache
        assert second.image_url == first.image_url
        assert generator.calls == 1

    @pytest.mark.asyncio
    async def test_lookup_is_case_sensitive(self, image_service, generator):
        lower = CacheKey(word="cat", part_of_speech="noun", definition="x")
        upper = CacheKey(word="Cat", part_of_speech="noun", definition="x")

        await image_service.generate_image(lower)
        result = await image_service.generate_image(upper)

        assert not result.from_cache
        assert generator.calls == 2

    @pytest.mark.asyncio
    async def test_whitespace_is_not_trimmed(self, image_service, generator):
        await image_service.generate_image(CacheKey(word="cat", part_of_speech="", definition="x"))
        result = await image_service.generate_image(CacheKey(word="cat ", part_of_speech="", definition="x"))

        assert not result.from_cache
        assert generator.calls == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "key,missing",
        [
            (CacheKey(word="", part_of_speech="noun", definition="x"), "word"),
            (CacheKey(word="cat", part_of_speech="noun", definition=""), "definition"),
            (CacheKey(word="", part_of_speech="", definition=""), "word, definition"),
        ],
    )
    async def test_missing_fields_rejected(self, image_service, store, generator, key, missing):
        result = await image_service.generate_image(key)

        assert result.error_kind is ErrorKind.VALIDATION
        assert result.message == f"Missing required field(s): {missing}"
        assert store.get_calls == 0
        assert generator.calls == 0

    @pytest.mark.asyncio
    async def test_empty_word_rejected_even_when_cached(self, image_service, store):
        key = CacheKey(word="", part_of_speech="", definition="x")
        await store.set(key, "https://images.example.com/stale.png")

        result = await image_service.generate_image(key)

        assert result.error_kind is ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_part_of_speech_is_optional(self, image_service, generator):
        result = await image_service.generate_image(CacheKey(word="run", part_of_speech="", definition="to move fast"))

        assert result.ok
        assert generator.prompts == ["Please draw a simple sketch of this: run () to move fast"]

    @pytest.mark.asyncio
    async def test_cache_read_failure(self, image_service, store, generator, cat_key):
        store.fail_reads = True

        result = await image_service.generate_image(cat_key)

        assert result.error_kind is ErrorKind.CACHE_UNAVAILABLE
        assert result.message == "cache unavailable"
        assert generator.calls == 0

    @pytest.mark.asyncio
    async def test_cache_write_failure_still_returns_image(self, image_service, store, generator, cat_key):
        store.fail_writes = True

        result = await image_service.generate_image(cat_key)

        assert result.ok
        assert result.image_url == generator.image_url
        assert store.set_calls == 1

    @pytest.mark.asyncio
    async def test_safety_rejection(self, image_service, store, generator, cat_key, safety_error):
        generator.error = safety_error

        result = await image_service.generate_image(cat_key)

        assert result.error_kind is ErrorKind.CONTENT_POLICY
        assert result.message == SAFETY_REJECTION_MESSAGE
        assert "content_policy_violation" not in result.message
        assert store.entries == {}

    @pytest.mark.asyncio
    async def test_bad_request_without_safety_marker_is_generic(self, image_service, generator, cat_key):
        generator.error = ImageGenerationError('400 Bad Request: {"error": {"message": "Invalid size"}}')

        result = await image_service.generate_image(cat_key)

        assert result.error_kind is ErrorKind.GENERATOR_FAILURE
        assert result.message == "failed to generate image"

    @pytest.mark.asyncio
    async def test_upstream_failure_is_generic(self, image_service, generator, cat_key):
        generator.error = ImageGenerationError("429 Too Many Requests: quota exceeded")

        result = await image_service.generate_image(cat_key)

        assert result.error_kind is ErrorKind.GENERATOR_FAILURE
        assert "quota" not in result.message

    @pytest.mark.asyncio
    async def test_missing_api_key(self, image_service, generator, cat_key):
        generator.error = ConfigurationError("OpenAI API key not configured")

        result = await image_service.generate_image(cat_key)

        assert result.error_kind is ErrorKind.CONFIGURATION

    @pytest.mark.asyncio
    async def test_custom_classifier(self, store, generator, cat_key):
        generator.error = ImageGenerationError("moderation_blocked")
        service = ImageService(store=store, generator=generator, classifier=lambda text: "moderation" in text)

        result = await service.generate_image(cat_key)

        assert result.error_kind is ErrorKind.CONTENT_POLICY

    @pytest.mark.asyncio
    async def test_concurrent_requests_leave_one_entry(self, image_service, store, cat_key):
        results = await asyncio.gather(*(image_service.generate_image(cat_key) for _ in range(5)))

        assert all(result.ok for result in results)
        assert list(store.entries) == [cat_key]


class TestLookup:
    """ImageService.lookup"""

    @pytest.mark.asyncio
    async def test_hit(self, image_service, store, generator, cat_key):
        await store.set(cat_key, "https://images.example.com/cat.png")

        result = await image_service.lookup(cat_key)

        assert result.ok
        assert result.image_url == "https://images.example.com/cat.png"
        assert generator.calls == 0

    @pytest.mark.asyncio
    async def test_miss_is_not_found(self, image_service, generator, cat_key):
        result = await image_service.lookup(cat_key)

        assert result.error_kind is ErrorKind.NOT_FOUND
        assert generator.calls == 0

    @pytest.mark.asyncio
    async def test_missing_fields(self, image_service):
        result = await image_service.lookup(CacheKey(word="cat", part_of_speech="", definition=""))

        assert result.error_kind is ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_store_failure(self, image_service, store, cat_key):
        store.fail_reads = True

        result = await image_service.lookup(cat_key)

        assert result.error_kind is ErrorKind.CACHE_UNAVAILABLE


class TestDeleteAndClear:
    """ImageService.delete / ImageService.clear"""

    @pytest.mark.asyncio
    async def test_clear_then_lookup_misses(self, image_service, cat_key):
        await image_service.generate_image(cat_key)

        assert await image_service.clear() == 1
        result = await image_service.lookup(cat_key)

        assert result.error_kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, image_service, cat_key):
        await image_service.generate_image(cat_key)

        assert await image_service.delete(cat_key) is True
        assert await image_service.delete(cat_key) is False
