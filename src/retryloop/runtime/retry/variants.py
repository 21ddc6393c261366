"""Named retry variants.

Thin presets over RetryLoop. Operations report failure by raising an
Exception or returning an Err; anything else is success. Every variant
returns the terminal outcome instead of raising:

    until_error*           -> the failure cause (or a timeout/cancellation error)
    until_success*         -> None (or a timeout/cancellation error)
    multiple_times*        -> None, or the failure cause of the last attempt

Durations are seconds (float) or datetime.timedelta.
"""

from __future__ import annotations

import threading
from datetime import timedelta

from retryloop.foundation.config import get_settings

from ..cancel import CancelSignal
from .loop import Operation, RetryLoop, StopCondition

Duration = float | timedelta
Signal = CancelSignal | threading.Event

_UNTIL_ERROR = StopCondition.UNTIL_ERROR
_UNTIL_SUCCESS = StopCondition.UNTIL_SUCCESS


# ─────────────────────────────────────────────────────────────────────────────
# Until Error
# ─────────────────────────────────────────────────────────────────────────────


def until_error(op: Operation) -> Exception:
    """Retry op until it fails. Returns the failure cause."""
    return RetryLoop(stop=_UNTIL_ERROR).run(op)  # type: ignore[return-value]


def until_error_with_delay(delay: Duration, op: Operation) -> Exception:
    """Retry op until it fails, sleeping `delay` between attempts."""
    return RetryLoop(stop=_UNTIL_ERROR, delay=delay).run(op)  # type: ignore[return-value]


def until_error_or_cancel(signal: Signal, op: Operation) -> Exception:
    """Retry op until it fails or `signal` fires.

    The signal is checked before every attempt, so an already-fired signal
    prevents op from running at all.
    """
    return RetryLoop(stop=_UNTIL_ERROR, signal=signal).run(op)  # type: ignore[return-value]


def until_error_or_timeout(timeout: Duration, op: Operation) -> Exception:
    """Retry op until it fails or more than `timeout` has elapsed.

    Returns op's failure, or LoopTimeoutError when the bound is crossed first.
    """
    return RetryLoop(stop=_UNTIL_ERROR, timeout=timeout).run(op)  # type: ignore[return-value]


# ─────────────────────────────────────────────────────────────────────────────
# Until Success
# ─────────────────────────────────────────────────────────────────────────────


def until_success(op: Operation) -> Exception | None:
    """Retry op until it succeeds. Loops forever if it never does."""
    return RetryLoop(stop=_UNTIL_SUCCESS).run(op)


def until_success_with_delay(delay: Duration, op: Operation) -> Exception | None:
    """Retry op until it succeeds, sleeping `delay` between attempts."""
    return RetryLoop(stop=_UNTIL_SUCCESS, delay=delay).run(op)


def until_success_or_timeout(timeout: Duration, op: Operation) -> Exception | None:
    """Retry op until it succeeds or more than `timeout` has elapsed.

    Returns None, or LoopTimeoutError. The bound is checked only after an
    attempt finishes.
    """
    return RetryLoop(stop=_UNTIL_SUCCESS, timeout=timeout).run(op)


def until_success_or_cancel(signal: Signal, op: Operation) -> Exception | None:
    """Retry op until it succeeds or `signal` fires. Returns None or the signal's error."""
    return RetryLoop(stop=_UNTIL_SUCCESS, signal=signal).run(op)


def until_succeeded_or_cancelled_with_delay(signal: Signal, delay: Duration, op: Operation) -> Exception | None:
    """Retry op until it succeeds or `signal` fires, sleeping `delay` between attempts."""
    return RetryLoop(stop=_UNTIL_SUCCESS, signal=signal, delay=delay).run(op)


# ─────────────────────────────────────────────────────────────────────────────
# Fixed Count
# ─────────────────────────────────────────────────────────────────────────────


def multiple_times(n: int, op: Operation) -> Exception | None:
    """Run op, retrying up to `n` times on failure (n + 1 attempts at most).

    Returns None on the first success, else the last attempt's failure.
    """
    return RetryLoop(stop=_UNTIL_SUCCESS, max_retries=n).run(op)


def multiple_times_with_delay(n: int, delay: Duration, op: Operation) -> Exception | None:
    """Like multiple_times, pausing `delay` after failed attempts.

    The pause follows attempt i (0-based) only while i < n - 1, so the
    sequence never ends on a sleep.
    """
    return RetryLoop(stop=_UNTIL_SUCCESS, max_retries=n, delay=delay).run(op)


def once(op: Operation) -> Exception | None:
    return multiple_times(1, op)


def once_with_small_delay(op: Operation) -> Exception | None:
    return multiple_times_with_delay(1, get_settings().small_delay, op)


def twice(op: Operation) -> Exception | None:
    return multiple_times(2, op)


def twice_with_small_delay(op: Operation) -> Exception | None:
    return multiple_times_with_delay(2, get_settings().small_delay, op)


def thrice(op: Operation) -> Exception | None:
    return multiple_times(3, op)


def thrice_with_small_delay(op: Operation) -> Exception | None:
    return multiple_times_with_delay(3, get_settings().small_delay, op)
