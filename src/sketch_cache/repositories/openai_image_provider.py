"""OpenAI-based image generator.

Calls the OpenAI Images API through the ``openai`` SDK to draw a single
square image and returns the hosted URL of the result.

Requirements:
    - ``OPENAI_API_KEY`` set in the environment (checked per request, so the
      service still starts without it)

Request shape:
    - model: dall-e-3
    - n: 1
    - size: 1024x1024
    - quality: standard
    - style: natural
    - response_format: url
"""

import logging

import httpx
from openai import APIStatusError, AsyncOpenAI, OpenAIError

from sketch_cache.config import settings
from sketch_cache.errors import ConfigurationError, ImageGenerationError

logger = logging.getLogger(__name__)


class OpenAIImageProvider:
    """OpenAI implementation of the ImageGenerator protocol.

    This class satisfies the ImageGenerator protocol through structural
    typing - no explicit inheritance needed.

    Errors are not classified here. A non-2xx response is raised as an
    ``ImageGenerationError`` whose message starts with the HTTP status
    line (for example ``"400 Bad Request: {...}"``) followed by the raw
    upstream body, leaving interpretation to the caller. The SDK's own
    retries are disabled; a failed call is reported immediately.

    Example:
        ```python
        provider = OpenAIImageProvider.create()
        url = await provider.generate("Please draw a simple sketch of this: cat (noun) ...")
        ```
    """

    IMAGE_SIZE = "1024x1024"
    IMAGE_QUALITY = "standard"
    IMAGE_STYLE = "natural"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model_name: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the OpenAI image provider.

        Args:
            api_key: OpenAI API key. Defaults to settings.openai_api_key.
            base_url: API base URL. Defaults to settings.openai_base_url.
            model_name: Image model. Defaults to settings.openai_image_model.
            timeout: Request timeout in seconds. Defaults to settings.openai_timeout.
            http_client: Optional httpx client for the SDK (used by tests).
        """
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self._base_url = (base_url or settings.openai_base_url).rstrip("/")
        self._model_name = model_name or settings.openai_image_model
        self._timeout = timeout or settings.openai_timeout
        self._http_client = http_client
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load the async OpenAI client.

        Returns:
            The AsyncOpenAI instance
        """
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        model_name: str | None = None,
    ) -> "OpenAIImageProvider":
        """Factory method to create OpenAIImageProvider with defaults.

        Args:
            api_key: API key. If None, uses settings.
            model_name: Model name. If None, uses settings.

        Returns:
            Configured OpenAIImageProvider
        """
        return cls(api_key=api_key, model_name=model_name)

    async def generate(self, prompt: str) -> str:
        """Generate one image and return its URL.

        Args:
            prompt: The drawing prompt

        Returns:
            URL of the generated image

        Raises:
            ConfigurationError: If no API key is configured
            ImageGenerationError: On transport errors, non-2xx responses,
                or a response without an image URL
        """
        if not self._api_key:
            raise ConfigurationError("OpenAI API key not configured")

        try:
            response = await self.client.images.generate(
                model=self._model_name,
                prompt=prompt,
                n=1,
                size=self.IMAGE_SIZE,
                quality=self.IMAGE_QUALITY,
                style=self.IMAGE_STYLE,
                response_format="url",
            )
        except APIStatusError as e:
            raise ImageGenerationError(
                f"{e.status_code} {e.response.reason_phrase}: {e.response.text}"
            ) from e
        except OpenAIError as e:
            raise ImageGenerationError(f"OpenAI request failed: {e!r}") from e

        images = getattr(response, "data", None) or []
        image_url = getattr(images[0], "url", None) if images else None
        if not image_url:
            raise ImageGenerationError("OpenAI response did not include an image URL")

        logger.debug("OpenAI returned image for prompt: %s", prompt)
        return image_url

    async def close(self) -> None:
        """Close the OpenAI client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.close()
            self._client = None
