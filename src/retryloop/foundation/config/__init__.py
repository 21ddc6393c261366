"""Configuration for retryloop."""

from .settings import LoggingSettings, RetryLoopSettings, clear_settings_cache, get_settings

__all__ = ["LoggingSettings", "RetryLoopSettings", "clear_settings_cache", "get_settings"]
