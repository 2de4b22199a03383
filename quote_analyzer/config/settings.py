"""
Application settings.

Settings are resolved once from the environment (see env.py) into a frozen
dataclass. The AI service client receives its base URL and timeouts from this
object at construction; nothing reads the environment at request time.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field

from quote_analyzer.config import env


@dataclass(frozen=True)
class Settings:
    """Typed, immutable application settings."""

    ai_service_url: str = env.DEFAULT_AI_SERVICE_URL
    ai_service_timeout_sec: float = env.DEFAULT_AI_SERVICE_TIMEOUT_SEC
    ai_service_health_timeout_sec: float = env.DEFAULT_AI_SERVICE_HEALTH_TIMEOUT_SEC
    api_host: str = env.DEFAULT_API_HOST
    api_port: int = env.DEFAULT_API_PORT
    cors_origins: tuple[str, ...] = field(default=env.DEFAULT_CORS_ORIGINS)
    log_level: str = env.DEFAULT_LOG_LEVEL
    log_format: str = env.DEFAULT_LOG_FORMAT

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (and .env). Raises ValueError on bad values."""
        return cls(
            ai_service_url=env.get_ai_service_url(),
            ai_service_timeout_sec=env.get_ai_service_timeout(),
            ai_service_health_timeout_sec=env.get_ai_service_health_timeout(),
            api_host=env.get_api_host(),
            api_port=env.get_api_port(),
            cors_origins=env.get_cors_origins(),
            log_level=env.get_log_level(),
            log_format=env.get_log_format(),
        )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the process-wide settings, resolved on first call.

    Tests that change the environment should call get_settings.cache_clear().
    """
    return Settings.from_env()
