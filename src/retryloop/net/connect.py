"""Wait for a TCP endpoint to accept connections.

Each attempt opens a fresh connection and closes it straight away; nothing
is pooled or reused.

Example:
    >>> from retryloop.net import connect_until_connected_or_timeout
    >>> err = connect_until_connected_or_timeout(5.0, "localhost", 5432)
    >>> if err is not None:
    ...     raise RuntimeError("database never came up") from err
"""

from __future__ import annotations

import logging
import socket
from datetime import timedelta
from typing import Callable

from retryloop.foundation.config import get_settings
from retryloop.runtime.cancel import with_timeout
from retryloop.runtime.retry import until_success, until_success_or_cancel

logger = logging.getLogger("retryloop.net")


def dial(address: str, port: int) -> None:
    """Open a TCP connection to address:port and close it immediately.

    Raises:
        OSError: If the connection cannot be established
    """
    with socket.create_connection((address, port), timeout=get_settings().dial_timeout):
        logger.debug(f"Connected to {address}:{port}")


def _dialer(address: str, port: int) -> Callable[[], None]:
    return lambda: dial(address, port)


def connect_until_connected(address: str, port: int) -> Exception | None:
    """Busy-retry until address:port accepts a TCP connection. Never gives up."""
    return until_success(_dialer(address, port))


def connect_until_connected_or_timeout(timeout: float | timedelta, address: str, port: int) -> Exception | None:
    """Retry until address:port accepts a TCP connection or `timeout` elapses.

    Returns:
        None once connected, else the DeadlineExceededError of the deadline
    """
    err = until_success_or_cancel(with_timeout(timeout), _dialer(address, port))
    if err is not None:
        logger.info(f"Gave up waiting for {address}:{port}: {err}")
    return err
