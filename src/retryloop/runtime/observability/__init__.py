"""Logging setup for retryloop."""

from .logging import configure_logging

__all__ = ["configure_logging"]
