"""Request DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sketch_cache.entities import CacheKey


class GenerateImageRequest(BaseModel):
    """Request DTO for generating an image.

    Missing and null fields become empty strings so that they reach the
    service's validation (400 naming the field) instead of FastAPI's
    schema errors.
    """

    model_config = ConfigDict(populate_by_name=True)

    word: str = Field("", description="The word to illustrate")
    part_of_speech: str = Field("", alias="partOfSpeech", description="Grammatical category (optional)")
    definition: str = Field("", description="The definition to illustrate")

    @field_validator("word", "part_of_speech", "definition", mode="before")
    @classmethod
    def null_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    def to_key(self) -> CacheKey:
        """Convert to the exact-match cache key, fields unchanged."""
        return CacheKey(word=self.word, part_of_speech=self.part_of_speech, definition=self.definition)
