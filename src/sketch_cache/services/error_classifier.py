"""Classification of upstream image generation failures."""

from collections.abc import Callable

ErrorClassifier = Callable[[str], bool]

SAFETY_REJECTION_MESSAGE = (
    "Your request was rejected by the AI safety system. Please try a different word or definition."
)


def is_content_policy_rejection(error_text: str) -> bool:
    """Return True if an upstream error is a content-policy refusal.

    OpenAI reports these as a 400 whose body mentions its "safety system".
    Both markers must be present.
    """
    return "400 Bad Request" in error_text and "safety system" in error_text
