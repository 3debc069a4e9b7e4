"""Prompt construction for the image generator."""

from sketch_cache.entities import CacheKey

PROMPT_TEMPLATE = "Please draw a simple sketch of this: {word} ({part_of_speech}) {definition}"


def build_prompt(key: CacheKey) -> str:
    """Render the drawing prompt for a word.

    The fields are inserted verbatim, so an empty part of speech renders
    as ``()``.

    >>> build_prompt(CacheKey("cat", "noun", "a small furry animal"))
    'Please draw a simple sketch of this: cat (noun) a small furry animal'
    """
    return PROMPT_TEMPLATE.format(
        word=key.word,
        part_of_speech=key.part_of_speech,
        definition=key.definition,
    )
