"""Environment-based configuration using pydantic-settings.

Example:
    >>> from retryloop.foundation.config import get_settings
    >>> get_settings().small_delay
    0.1

    # Or with environment variables:
    # RETRYLOOP_SMALL_DELAY=0.25
    # RETRYLOOP_DIAL_TIMEOUT=2
    # RETRYLOOP_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, NonNegativeFloat, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRYLOOP_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    include_timestamps: bool = True


class RetryLoopSettings(BaseSettings):
    """Root settings, loaded from RETRYLOOP_* environment variables.

    Example environment variables:
        RETRYLOOP_SMALL_DELAY=0.2
        RETRYLOOP_DIAL_TIMEOUT=1.5
        RETRYLOOP_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="RETRYLOOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    small_delay: NonNegativeFloat = Field(
        default=0.1,
        description="Pacing used by the *_with_small_delay variants, in seconds",
    )
    dial_timeout: PositiveFloat | None = Field(
        default=None,
        description="Connect timeout for a single TCP dial attempt (None = OS default)",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> RetryLoopSettings:
    """Get the global settings instance (cached)."""
    return RetryLoopSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() rereads the environment."""
    get_settings.cache_clear()
