"""Image generator protocol.

Defines the interface for any remote service that turns a text prompt
into a generated image and hands back a locator for it.

Implementations can include:
- OpenAI Images API (default)
- Any other hosted text-to-image endpoint
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ImageGenerator(Protocol):
    """Protocol for image generation services."""

    async def generate(self, prompt: str) -> str:
        """Generate exactly one image for a prompt.

        Args:
            prompt: The natural-language prompt

        Returns:
            URL of the generated image

        Raises:
            ConfigurationError: If the service is missing its credential
            ImageGenerationError: If the upstream call fails for any reason
        """
        ...
