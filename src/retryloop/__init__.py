"""retryloop - Retry primitives for fallible operations.

Repeatedly invoke an operation until it succeeds, fails, a cancellation
signal fires, a time budget runs out, or a fixed number of attempts is
used up. Operations report failure by raising an Exception (or returning
an Err); loops return the terminal outcome instead of raising.

Quick Start:
    >>> from retryloop import multiple_times, until_success_or_timeout
    >>>
    >>> err = multiple_times(3, lambda: api.ping())
    >>> if err is not None:
    ...     raise err
    >>>
    >>> err = until_success_or_timeout(10.0, check_migrations_applied)

Cancellation:
    >>> from retryloop import CancelToken, until_error_or_cancel
    >>> token = CancelToken()
    >>> # token.cancel() from any thread stops the loop before its next attempt
    >>> err = until_error_or_cancel(token, poll_queue)

Waiting for a service:
    >>> from retryloop import connect_until_connected_or_timeout
    >>> connect_until_connected_or_timeout(30.0, "localhost", 5432)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import (
    CancelledError,
    DeadlineExceededError,
    Err,
    ErrorCode,
    LoopTimeoutError,
    Ok,
    OperationFailedError,
    Result,
    RetryLoopError,
)

# Settings
from .foundation.config import RetryLoopSettings, clear_settings_cache, get_settings

# Cancellation
from .runtime.cancel import CancelSignal, CancelToken, Deadline, with_timeout

# Retry loops
from .runtime.retry import (
    RetryLoop,
    StopCondition,
    multiple_times,
    multiple_times_with_delay,
    once,
    once_with_small_delay,
    thrice,
    thrice_with_small_delay,
    twice,
    twice_with_small_delay,
    until_error,
    until_error_or_cancel,
    until_error_or_timeout,
    until_error_with_delay,
    until_succeeded_or_cancelled_with_delay,
    until_success,
    until_success_or_cancel,
    until_success_or_timeout,
    until_success_with_delay,
)

# Logging
from .runtime.observability import configure_logging

# Connectivity
from .net import connect_until_connected, connect_until_connected_or_timeout, dial

__all__ = [
    "__version__",
    # Errors
    "ErrorCode", "RetryLoopError", "OperationFailedError", "LoopTimeoutError", "CancelledError", "DeadlineExceededError",
    "Result", "Ok", "Err",
    # Settings
    "RetryLoopSettings", "get_settings", "clear_settings_cache",
    # Cancellation
    "CancelSignal", "CancelToken", "Deadline", "with_timeout",
    # Retry loops
    "RetryLoop", "StopCondition",
    "until_error", "until_error_with_delay", "until_error_or_cancel", "until_error_or_timeout",
    "until_success", "until_success_with_delay", "until_success_or_timeout", "until_success_or_cancel",
    "until_succeeded_or_cancelled_with_delay",
    "multiple_times", "multiple_times_with_delay",
    "once", "once_with_small_delay", "twice", "twice_with_small_delay", "thrice", "thrice_with_small_delay",
    # Logging
    "configure_logging",
    # Connectivity
    "connect_until_connected", "connect_until_connected_or_timeout", "dial",
]
