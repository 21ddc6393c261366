"""Runtime layer: cancellation signals, retry loops and logging setup."""

from .cancel import CancelSignal, CancelToken, Deadline, with_timeout
from .retry import RetryLoop, StopCondition

__all__ = ["CancelSignal", "CancelToken", "Deadline", "with_timeout", "RetryLoop", "StopCondition"]
