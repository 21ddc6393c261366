"""Distinguished errors surfaced by retry loops.

Operation errors are never wrapped; these types only mark the outcomes a
loop produces on its own (elapsed-time bound exceeded, signal fired).
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Machine-readable classification of loop-produced errors."""
    FAILED = "FAILED"
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"


class RetryLoopError(Exception):
    """Base for errors produced by the retry engine itself."""

    code: ErrorCode = ErrorCode.CANCELLED

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message())

    def default_message(self) -> str:
        return self.code.value.lower().replace("_", " ")


class OperationFailedError(RetryLoopError):
    """An attempt failed without reporting a cause (e.g. it returned Err(None))."""

    code = ErrorCode.FAILED

    def default_message(self) -> str:
        return "operation failed without a cause"


class LoopTimeoutError(RetryLoopError, TimeoutError):
    """Elapsed-time bound exceeded before the stop condition was met.

    Attributes:
        timeout: Configured bound in seconds
        elapsed: Seconds elapsed when the bound was observed
    """

    code = ErrorCode.TIMEOUT

    def __init__(self, timeout: float, elapsed: float) -> None:
        self.timeout = timeout
        self.elapsed = elapsed
        super().__init__(f"retry loop timed out after {elapsed:.3f}s (bound {timeout:.3f}s)")


class CancelledError(RetryLoopError):
    """Cancellation signal fired before the stop condition was met."""

    code = ErrorCode.CANCELLED

    def default_message(self) -> str:
        return "retry loop cancelled"


class DeadlineExceededError(CancelledError, TimeoutError):
    """A timer-armed cancellation signal fired."""

    code = ErrorCode.DEADLINE_EXCEEDED

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"deadline of {timeout:.3f}s exceeded")
