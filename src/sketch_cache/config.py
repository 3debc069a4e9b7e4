import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

# Characters Redis SCAN MATCH treats as a pattern.
GLOB_CHARACTERS = "*?[]\\"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_socket_timeout: float = float(os.getenv("REDIS_SOCKET_TIMEOUT", "5"))

    # Cache
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "sketch_cache")
    cache_admin_enabled: bool = _env_flag("CACHE_ADMIN_ENABLED", "false")

    # OpenAI
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    openai_image_model: str = os.getenv("OPENAI_IMAGE_MODEL", "dall-e-3")
    openai_timeout: float = float(os.getenv("OPENAI_TIMEOUT", "60"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", os.getenv("PORT", "8080")))
    api_reload: bool = _env_flag("API_RELOAD", "false")
    frontend_url: str = os.getenv("FRONTEND_URL", "")
    static_dir: str | None = os.getenv("STATIC_DIR")

    # Logging
    log_dir: str = os.getenv("LOG_DIR", "logs")
    app_env: str = os.getenv("APP_ENV", os.getenv("NODE_ENV", "production"))

    @property
    def is_development(self) -> bool:
        """Check if debug-level diagnostics should be emitted.

        Returns:
            True when running in the development environment
        """
        return self.app_env.lower() == "development"

    @property
    def allowed_origins(self) -> list[str]:
        """Split FRONTEND_URL into the list of CORS origins."""
        return [origin.strip() for origin in self.frontend_url.split(",") if origin.strip()]

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.redis_socket_timeout <= 0:
            raise ValueError("REDIS_SOCKET_TIMEOUT must be greater than 0")

        if self.openai_timeout <= 0:
            raise ValueError("OPENAI_TIMEOUT must be greater than 0")

        if not self.cache_key_prefix:
            raise ValueError("CACHE_KEY_PREFIX must not be empty")

        if any(char in self.cache_key_prefix for char in GLOB_CHARACTERS):
            raise ValueError("CACHE_KEY_PREFIX must not contain glob characters")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an asyncio Redis client bounded by the configured socket timeout."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_timeout,
        decode_responses=True,
    )
