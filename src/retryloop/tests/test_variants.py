"""Tests for the named retry variants.

Validates attempt counts, returned errors and pacing for every preset.
"""

from __future__ import annotations

import threading
from datetime import timedelta

import pytest

from retryloop import (
    CancelToken,
    CancelledError,
    Err,
    LoopTimeoutError,
    Ok,
    OperationFailedError,
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

from .conftest import Flaky, SleepRecorder


class Succeeds:
    """Operation that succeeds a fixed number of times, then fails."""

    def __init__(self, successes: int) -> None:
        self.successes = successes
        self.calls = 0
        self.error = ValueError("finally failed")

    def __call__(self) -> None:
        self.calls += 1
        if self.calls > self.successes:
            raise self.error


# ─────────────────────────────────────────────────────────────────────────────
# Fixed Count
# ─────────────────────────────────────────────────────────────────────────────


class TestMultipleTimes:
    """Tests for multiple_times and its once/twice/thrice presets."""

    def test_succeeds_after_failures(self) -> None:
        op = Flaky(failures=3)
        assert multiple_times(3, op) is None
        # 1 failed run + 3 retries
        assert op.calls == 4

    def test_succeeds_after_fewer_failures(self) -> None:
        op = Flaky(failures=2)
        assert multiple_times(2, op) is None
        assert op.calls == 3

    def test_first_success_stops_immediately(self) -> None:
        op = Flaky(failures=0)
        assert multiple_times(5, op) is None
        assert op.calls == 1

    def test_returns_last_error_when_exhausted(self) -> None:
        op = Flaky(failures=10)
        err = multiple_times(3, op)
        assert op.calls == 4
        assert err is op.errors[-1]
        assert str(err) == "attempt 4 failed"

    def test_zero_retries_is_single_attempt(self) -> None:
        op = Flaky(failures=10)
        assert multiple_times(0, op) is op.errors[0]
        assert op.calls == 1

    def test_err_result_counts_as_failure(self) -> None:
        calls: list[int] = []

        def op() -> object:
            calls.append(1)
            return Err("not ready") if len(calls) < 3 else Ok()

        assert multiple_times(5, op) is None
        assert len(calls) == 3

    def test_err_value_returned_verbatim(self) -> None:
        assert multiple_times(1, lambda: Err("still not ready")) == "still not ready"

    def test_causeless_err_is_still_a_failure(self) -> None:
        calls = 0

        def op() -> object:
            nonlocal calls
            calls += 1
            return Err(None)

        err = multiple_times(2, op)
        assert isinstance(err, OperationFailedError)
        assert calls == 3

    @pytest.mark.parametrize(("fn", "attempts"), [(once, 2), (twice, 3), (thrice, 4)])
    def test_presets(self, fn: object, attempts: int) -> None:
        op = Flaky(failures=10)
        err = fn(op)  # type: ignore[operator]
        assert op.calls == attempts
        assert err is op.errors[-1]

    def test_negative_count_rejected(self) -> None:
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            multiple_times(-1, lambda: None)


class TestMultipleTimesWithDelay:
    """Pacing for count-bounded loops never ends on a sleep."""

    def test_all_failures(self, patched_sleep: SleepRecorder) -> None:
        op = Flaky(failures=10)
        err = multiple_times_with_delay(3, 0.5, op)
        assert op.calls == 4
        assert err is op.errors[-1]
        assert patched_sleep.calls == [0.5, 0.5]

    @pytest.mark.parametrize(("failures", "sleeps"), [(0, 0), (1, 1), (2, 2), (3, 2)])
    def test_sleeps_min_of_failures_and_n_minus_one(
        self, patched_sleep: SleepRecorder, failures: int, sleeps: int
    ) -> None:
        op = Flaky(failures=failures)
        assert multiple_times_with_delay(3, 0.01, op) is None
        assert op.calls == failures + 1
        assert len(patched_sleep.calls) == sleeps

    def test_single_retry_never_sleeps(self, patched_sleep: SleepRecorder) -> None:
        op = Flaky(failures=10)
        multiple_times_with_delay(1, 1.0, op)
        assert op.calls == 2
        assert patched_sleep.calls == []

    def test_zero_delay_never_sleeps(self, patched_sleep: SleepRecorder) -> None:
        multiple_times_with_delay(3, 0, Flaky(failures=10))
        assert patched_sleep.calls == []

    def test_accepts_timedelta(self, patched_sleep: SleepRecorder) -> None:
        multiple_times_with_delay(2, timedelta(milliseconds=250), Flaky(failures=10))
        assert patched_sleep.calls == [0.25]

    def test_small_delay_presets(self, patched_sleep: SleepRecorder) -> None:
        once_with_small_delay(Flaky(failures=10))
        assert patched_sleep.calls == []

        twice_with_small_delay(Flaky(failures=10))
        assert patched_sleep.calls == [0.1]

        patched_sleep.calls.clear()
        op = Flaky(failures=10)
        thrice_with_small_delay(op)
        assert op.calls == 4
        assert patched_sleep.calls == [0.1, 0.1]

    def test_small_delay_from_environment(
        self, patched_sleep: SleepRecorder, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RETRYLOOP_SMALL_DELAY", "0.25")
        twice_with_small_delay(Flaky(failures=10))
        assert patched_sleep.calls == [0.25]


# ─────────────────────────────────────────────────────────────────────────────
# Until Error
# ─────────────────────────────────────────────────────────────────────────────


class TestUntilError:
    """Tests for the until_error family."""

    def test_returns_first_failure(self) -> None:
        op = Succeeds(successes=2)
        assert until_error(op) is op.error
        assert op.calls == 3

    def test_causeless_err_is_returned_as_failure(self) -> None:
        err = until_error(lambda: Err(None))
        assert err is not None
        assert isinstance(err, OperationFailedError)

    def test_with_delay_sleeps_between_successes(self, patched_sleep: SleepRecorder) -> None:
        op = Succeeds(successes=2)
        assert until_error_with_delay(0.2, op) is op.error
        assert op.calls == 3
        assert patched_sleep.calls == [0.2, 0.2]

    def test_or_cancel_returns_cancellation_after_k_calls(self) -> None:
        token = CancelToken()
        calls = 0

        def op() -> None:
            nonlocal calls
            calls += 1
            if calls == 3:
                token.cancel()

        err = until_error_or_cancel(token, op)
        assert isinstance(err, CancelledError)
        assert calls == 3

    def test_or_cancel_returns_op_error_first(self) -> None:
        op = Succeeds(successes=1)
        assert until_error_or_cancel(CancelToken(), op) is op.error

    def test_or_cancel_precancelled_runs_nothing(self) -> None:
        token = CancelToken()
        token.cancel()
        op = Succeeds(successes=0)
        assert isinstance(until_error_or_cancel(token, op), CancelledError)
        assert op.calls == 0

    def test_or_cancel_accepts_threading_event(self) -> None:
        event = threading.Event()
        calls = 0

        def op() -> None:
            nonlocal calls
            calls += 1
            if calls == 2:
                event.set()

        assert isinstance(until_error_or_cancel(event, op), CancelledError)
        assert calls == 2

    def test_or_timeout_returns_timeout(self) -> None:
        err = until_error_or_timeout(0.05, lambda: None)
        assert isinstance(err, LoopTimeoutError)
        assert isinstance(err, TimeoutError)
        assert err.elapsed > 0.05

    def test_or_timeout_returns_op_error_first(self) -> None:
        op = Succeeds(successes=3)
        assert until_error_or_timeout(60.0, op) is op.error
        assert op.calls == 4


# ─────────────────────────────────────────────────────────────────────────────
# Until Success
# ─────────────────────────────────────────────────────────────────────────────


class TestUntilSuccess:
    """Tests for the until_success family."""

    def test_retries_until_success(self) -> None:
        op = Flaky(failures=2)
        assert until_success(op) is None
        assert op.calls == 3

    def test_with_delay(self, patched_sleep: SleepRecorder) -> None:
        op = Flaky(failures=3)
        assert until_success_with_delay(0.3, op) is None
        assert op.calls == 4
        assert patched_sleep.calls == [0.3, 0.3, 0.3]

    def test_or_timeout_returns_timeout_not_op_error(self) -> None:
        refused = ConnectionRefusedError("nothing listening")

        def op() -> None:
            raise refused

        err = until_success_or_timeout(0.05, op)
        assert isinstance(err, LoopTimeoutError)
        assert err is not refused

    def test_or_timeout_success(self) -> None:
        op = Flaky(failures=1)
        assert until_success_or_timeout(60.0, op) is None
        assert op.calls == 2

    def test_or_cancel_returns_cancellation_after_k_calls(self) -> None:
        token = CancelToken()
        calls = 0

        def op() -> None:
            nonlocal calls
            calls += 1
            if calls == 3:
                token.cancel()
            raise ConnectionError("refused")

        err = until_success_or_cancel(token, op)
        assert isinstance(err, CancelledError)
        assert calls == 3

    def test_or_cancel_returns_custom_reason(self) -> None:
        token = CancelToken()
        reason = RuntimeError("shutting down")
        token.cancel(reason)
        assert until_success_or_cancel(token, lambda: None) is reason

    def test_or_cancel_success(self) -> None:
        op = Flaky(failures=2)
        assert until_success_or_cancel(CancelToken(), op) is None
        assert op.calls == 3

    def test_cancelled_with_delay(self, patched_sleep: SleepRecorder) -> None:
        token = CancelToken()
        calls = 0

        def op() -> None:
            nonlocal calls
            calls += 1
            if calls == 2:
                token.cancel()
            raise ConnectionError("refused")

        assert isinstance(until_succeeded_or_cancelled_with_delay(token, 0.5, op), CancelledError)
        assert calls == 2
        assert patched_sleep.calls == [0.5, 0.5]

    def test_cancelled_with_zero_delay_does_not_sleep(self, patched_sleep: SleepRecorder) -> None:
        op = Flaky(failures=2)
        assert until_succeeded_or_cancelled_with_delay(CancelToken(), 0, op) is None
        assert patched_sleep.calls == []
