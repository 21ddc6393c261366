"""Cooperative cancellation signals observed by retry loops.

A signal is owned and fired by the caller; loops only query it between
attempts. Nothing here spawns threads or timers: a Deadline is evaluated
lazily against the monotonic clock whenever it is queried.

Example:
    >>> token = CancelToken()
    >>> token.is_cancelled()
    False
    >>> token.cancel()
    >>> token.error()
    CancelledError('retry loop cancelled')

    >>> deadline = with_timeout(5.0)
    >>> deadline.remaining > 0
    True
"""

from __future__ import annotations

import threading
import time
from datetime import timedelta
from typing import Callable, Protocol, runtime_checkable

from retryloop.foundation.errors import CancelledError, DeadlineExceededError


@runtime_checkable
class CancelSignal(Protocol):
    """Protocol for cancellation signals.

    Implementations report whether they have fired and, once fired, the
    error a loop should return.
    """

    def is_cancelled(self) -> bool: ...
    def error(self) -> Exception | None: ...


class CancelToken:
    """Manually fired cancellation signal. Safe to fire from another thread."""

    __slots__ = ("_event", "_lock", "_reason")

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Exception | None = None

    def cancel(self, reason: Exception | None = None) -> None:
        """Fire the signal. The first reason wins; later calls are no-ops."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason or CancelledError()
            self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def error(self) -> Exception | None:
        return self._reason if self._event.is_set() else None

    def __repr__(self) -> str:
        return f"CancelToken(cancelled={self.is_cancelled()})"


class Deadline(CancelToken):
    """Cancellation signal armed to fire once `timeout` seconds have elapsed.

    Args:
        timeout: Seconds from construction until the signal fires
        clock: Monotonic clock (default: time.monotonic)
    """

    __slots__ = ("timeout", "_clock", "_expires_at")

    def __init__(self, timeout: float | timedelta, clock: Callable[[], float] | None = None) -> None:
        super().__init__()
        self.timeout = to_seconds(timeout)
        if self.timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {self.timeout}")
        self._clock = clock or time.monotonic
        self._expires_at = self._clock() + self.timeout

    @property
    def remaining(self) -> float:
        """Seconds left before expiry (0.0 once expired)."""
        return max(0.0, self._expires_at - self._clock())

    def is_cancelled(self) -> bool:
        if not self._event.is_set() and self._clock() >= self._expires_at:
            self.cancel(DeadlineExceededError(self.timeout))
        return self._event.is_set()

    def error(self) -> Exception | None:
        return self._reason if self.is_cancelled() else None

    def __repr__(self) -> str:
        return f"Deadline(timeout={self.timeout}, remaining={self.remaining:.3f})"


def with_timeout(timeout: float | timedelta) -> Deadline:
    """Create a Deadline armed for `timeout`."""
    return Deadline(timeout)


def is_fired(signal: CancelSignal | threading.Event) -> bool:
    """Query a signal. Plain threading.Event objects are accepted too."""
    if isinstance(signal, threading.Event):
        return signal.is_set()
    return signal.is_cancelled()


def cancel_error(signal: CancelSignal | threading.Event) -> Exception:
    """Error to return for a fired signal."""
    err = None if isinstance(signal, threading.Event) else signal.error()
    return err or CancelledError()


def to_seconds(value: float | timedelta) -> float:
    """Normalise a duration to float seconds."""
    return value.total_seconds() if isinstance(value, timedelta) else float(value)
