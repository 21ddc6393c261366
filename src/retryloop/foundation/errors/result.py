"""Binary outcome of a single operation attempt.

A trimmed Result/Either: the retry engine only needs to know whether an
attempt succeeded and, if not, what the cause was. Operations may either
raise or return an ``Err`` to report failure.

Performance notes:
- Uses __slots__ for minimal memory footprint
- Direct attribute access in the loop's hot path
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")

_OK = True
_ERR = False


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).

    Examples:
        >>> Ok(None).is_ok()
        True
        >>> Err(ValueError("boom")).err()
        ValueError('boom')
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value = value
        self._is_ok = is_ok

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    def unwrap(self) -> T:
        """Extract Ok value. Raises the cause itself when it is an exception."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        if isinstance(self._value, BaseException):
            raise self._value
        raise RuntimeError(f"unwrap() on Err: {self._value}")

    def unwrap_err(self) -> E:
        """Extract Err value. Raises RuntimeError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap_err() on Ok: {self._value}")

    def ok(self) -> T | None:
        return self._value if self._is_ok else None  # type: ignore[return-value]

    def err(self) -> E | None:
        return self._value if not self._is_ok else None  # type: ignore[return-value]

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to Err value. Signature: Result[T,E] → (E→F) → Result[T,F]"""
        return Result(f(self._value), _ERR) if not self._is_ok else Result(self._value, _OK)  # type: ignore[arg-type]

    __bool__ = lambda self: self._is_ok  # noqa: E731
    __hash__ = lambda self: hash((self._is_ok, self._value))  # noqa: E731
    __repr__ = lambda self: f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"  # noqa: E731

    def __eq__(self, other: object) -> bool:
        return self._is_ok == other._is_ok and self._value == other._value if isinstance(other, Result) else NotImplemented


def Ok(value: T = None) -> Result[T, E]:  # type: ignore[assignment]  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, _ERR)


def outcome(value: object) -> Result[object, object]:
    """Classify an operation's return value.

    A returned Result is taken as-is; anything else counts as success.
    """
    return value if isinstance(value, Result) else Result(value, _OK)


def attempt(op: Callable[[], object]) -> Result[object, object]:
    """Run op once and capture its outcome.

    Exceptions become Err with the exception object as the cause.
    BaseExceptions outside Exception (KeyboardInterrupt, SystemExit) propagate.
    """
    try:
        return outcome(op())
    except Exception as e:
        return Result(e, _ERR)


async def attempt_async(op: Callable[[], Awaitable[object]]) -> Result[object, object]:
    """Await op once and capture its outcome."""
    try:
        return outcome(await op())
    except Exception as e:
        return Result(e, _ERR)
