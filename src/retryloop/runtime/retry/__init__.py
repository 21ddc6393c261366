"""Retry loops over fallible operations.

One configurable core (RetryLoop) and the named variants built on it.

Example:
    >>> from retryloop.runtime.retry import multiple_times, until_success_or_timeout
    >>>
    >>> err = multiple_times(3, lambda: client.ping())
    >>> if err is not None:
    ...     raise err
    >>>
    >>> err = until_success_or_timeout(5.0, check_ready)
"""

from .loop import AsyncOperation, Operation, RetryLoop, StopCondition
from .variants import (
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

__all__ = [
    # Core
    "RetryLoop",
    "StopCondition",
    "Operation",
    "AsyncOperation",
    # Until error
    "until_error",
    "until_error_with_delay",
    "until_error_or_cancel",
    "until_error_or_timeout",
    # Until success
    "until_success",
    "until_success_with_delay",
    "until_success_or_timeout",
    "until_success_or_cancel",
    "until_succeeded_or_cancelled_with_delay",
    # Fixed count
    "multiple_times",
    "multiple_times_with_delay",
    "once",
    "once_with_small_delay",
    "twice",
    "twice_with_small_delay",
    "thrice",
    "thrice_with_small_delay",
]
