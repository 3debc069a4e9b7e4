"""Cache key and cache entry domain entities."""

import hashlib
import json
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CacheKey:
    """Exact-match lookup key for a cached image.

    Fields are compared verbatim: "Cat" and "cat" are different keys and
    surrounding whitespace is significant.

    Attributes:
        word: The word being illustrated
        part_of_speech: Grammatical category, may be empty
        definition: The definition being illustrated
    """

    word: str
    part_of_speech: str
    definition: str

    def digest(self) -> str:
        """Return a stable hex digest identifying this key.

        The fields are JSON-encoded as an array before hashing so that no
        two distinct triples serialize to the same bytes.
        """
        raw = json.dumps([self.word, self.part_of_speech, self.definition], ensure_ascii=False)
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached image reference.

    Attributes:
        key: The exact triple the image was generated for
        image_url: Locator of the generated image
        created_at: When the entry was last written (UTC)
    """

    key: CacheKey
    image_url: str
    created_at: datetime
