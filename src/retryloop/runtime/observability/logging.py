"""stdlib logging setup for the ``retryloop`` logger hierarchy.

The library itself only creates loggers (``retryloop.retry``, ``retryloop.net``)
and never touches the root logger. Applications that want loop diagnostics
call configure_logging() once at startup.

Example:
    >>> from retryloop.runtime.observability import configure_logging
    >>> configure_logging("DEBUG")
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from retryloop.foundation.config import get_settings

ROOT_LOGGER = "retryloop"

_TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"
_TIMESTAMP_FORMAT = "%(asctime)s " + _TEXT_FORMAT


def configure_logging(level: str | None = None, *, output: TextIO | None = None) -> logging.Logger:
    """Attach a stream handler to the ``retryloop`` logger.

    Args:
        level: Log level name; defaults to RETRYLOOP_LOG_LEVEL
        output: Stream to write to (default: stderr)

    Returns:
        The configured ``retryloop`` logger
    """
    settings = get_settings().logging
    name = (level or settings.level).upper()
    if name not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_retryloop", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(output or sys.stderr)
    handler.setFormatter(logging.Formatter(_TIMESTAMP_FORMAT if settings.include_timestamps else _TEXT_FORMAT))
    handler._retryloop = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(name)
    return logger
