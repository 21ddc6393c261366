"""Error handling for retryloop.

- ErrorCode: classification of loop-produced errors
- RetryLoopError and subclasses: timeout and cancellation outcomes
- Result/Ok/Err: outcome of a single operation attempt
"""

from .errors import (
    CancelledError,
    DeadlineExceededError,
    ErrorCode,
    LoopTimeoutError,
    OperationFailedError,
    RetryLoopError,
)
from .result import Err, Ok, Result, attempt, attempt_async, outcome

__all__ = [
    # Loop errors
    "ErrorCode", "RetryLoopError", "OperationFailedError", "LoopTimeoutError", "CancelledError", "DeadlineExceededError",
    # Outcomes
    "Result", "Ok", "Err", "attempt", "attempt_async", "outcome",
]
