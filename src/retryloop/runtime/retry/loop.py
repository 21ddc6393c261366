"""Configurable core retry loop.

Every named variant (until_error, until_success_or_cancel, multiple_times, ...)
is a preset of RetryLoop: a stop condition plus at most one bound (signal,
elapsed-time timeout, or retry count) and an optional fixed pacing delay.

Loop body:
    check signal → run one attempt → evaluate stop condition
    → check bound → pace → repeat

Attempts run strictly one at a time on the caller's thread. A signal is
only observed between attempts; an in-flight attempt is never interrupted.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Awaitable
from datetime import timedelta
from enum import StrEnum
from typing import Callable

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    field_validator,
    model_validator,
)

from retryloop.foundation.errors import LoopTimeoutError, OperationFailedError, Result, attempt, attempt_async
from retryloop.runtime.cancel import CancelSignal, cancel_error, is_fired, to_seconds

logger = logging.getLogger("retryloop.retry")

Operation = Callable[[], object]
AsyncOperation = Callable[[], Awaitable[object]]


class StopCondition(StrEnum):
    """Which attempt outcome ends the loop."""
    UNTIL_ERROR = "until_error"
    UNTIL_SUCCESS = "until_success"


class RetryLoop(BaseModel):
    """Retry loop configuration and executor.

    Attributes:
        stop: Outcome that ends the loop
        delay: Fixed pause in seconds between attempts (0 = busy-retry)
        timeout: Elapsed-time bound in seconds, checked after each attempt
        max_retries: Retry bound; the loop makes at most max_retries + 1 attempts
        signal: Cancellation signal checked before each attempt
        sleep: Sleep function for run() (default: time.sleep, resolved per run)
        async_sleep: Awaitable sleep for run_async() (default: asyncio.sleep)
        clock: Monotonic clock (default: time.monotonic, resolved per run)

    Example:
        >>> loop = RetryLoop(stop=StopCondition.UNTIL_SUCCESS, max_retries=2, delay=0.1)
        >>> loop.run(lambda: None) is None
        True
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # For CancelSignal protocol and threading.Event
        extra="forbid",
        revalidate_instances="never",
    )

    stop: StopCondition
    delay: NonNegativeFloat = 0.0
    timeout: NonNegativeFloat | None = None
    max_retries: NonNegativeInt | None = None
    signal: CancelSignal | threading.Event | None = Field(default=None, repr=False)
    sleep: Callable[[float], None] | None = Field(default=None, exclude=True, repr=False)
    async_sleep: Callable[[float], Awaitable[None]] | None = Field(default=None, exclude=True, repr=False)
    clock: Callable[[], float] | None = Field(default=None, exclude=True, repr=False)

    @field_validator("delay", "timeout", mode="before")
    @classmethod
    def _normalize_duration(cls, v: float | timedelta | None) -> float | None:
        """Accept timedelta and convert to seconds."""
        return to_seconds(v) if isinstance(v, timedelta) else v

    @model_validator(mode="after")
    def _single_bound(self) -> RetryLoop:
        bounds = [n for n in ("timeout", "max_retries", "signal") if getattr(self, n) is not None]
        if len(bounds) > 1:
            raise ValueError(f"at most one bound may be set, got {', '.join(bounds)}")
        return self

    def _stops(self, result: Result[object, object]) -> bool:
        return result.is_err() if self.stop is StopCondition.UNTIL_ERROR else result.is_ok()

    @staticmethod
    def _cause(result: Result[object, object]) -> object:
        """Failure cause of a terminal attempt; None only for success."""
        if result.is_ok():
            return None
        cause = result.err()
        return OperationFailedError() if cause is None else cause

    def _paces(self, index: int) -> bool:
        """Whether to sleep after the attempt with 0-based `index`."""
        if self.delay <= 0:
            return False
        # Count-bounded loops skip the pause once index reaches max_retries - 1
        return self.max_retries is None or index < self.max_retries - 1

    def _next(self, result: Result[object, object], index: int, start: float, clock: Callable[[], float]) -> tuple[bool, object]:
        """Evaluate one attempt. Returns (done, value to return)."""
        if self._stops(result):
            return True, self._cause(result)
        if self.max_retries is not None and index >= self.max_retries:
            logger.debug(f"Retries exhausted after {index + 1} attempts")
            return True, self._cause(result)
        if self.timeout is not None and (elapsed := clock() - start) > self.timeout:
            logger.info(f"Retry loop timed out after {elapsed:.3f}s ({index + 1} attempts)")
            return True, LoopTimeoutError(self.timeout, elapsed)
        logger.debug(f"Attempt {index + 1} did not stop the loop ({self.stop}), retrying")
        return False, None

    def _cancelled(self, index: int) -> Exception | None:
        if self.signal is None or not is_fired(self.signal):
            return None
        logger.info(f"Retry loop cancelled before attempt {index + 1}")
        return cancel_error(self.signal)

    def run(self, op: Operation) -> Exception | None:
        """Run op until the stop condition or bound is met.

        Returns:
            The terminal failure cause, a LoopTimeoutError, the signal's
            cancellation error, or None on a terminal success.
        """
        sleep = self.sleep or time.sleep
        clock = self.clock or time.monotonic
        start = clock()
        index = 0

        while True:
            if (err := self._cancelled(index)) is not None:
                return err
            done, value = self._next(attempt(op), index, start, clock)
            if done:
                return value  # type: ignore[return-value]
            if self._paces(index):
                sleep(self.delay)
            index += 1

    async def run_async(self, op: AsyncOperation) -> Exception | None:
        """Async counterpart of run() for coroutine operations.

        Attempts are awaited one at a time. Pacing awaits async_sleep (default
        asyncio.sleep); the synchronous sleep is never called here.
        """
        sleep = self.async_sleep or asyncio.sleep
        clock = self.clock or time.monotonic
        start = clock()
        index = 0

        while True:
            if (err := self._cancelled(index)) is not None:
                return err
            done, value = self._next(await attempt_async(op), index, start, clock)
            if done:
                return value  # type: ignore[return-value]
            if self._paces(index):
                await sleep(self.delay)
            index += 1
