"""Shared fixtures for retryloop tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from retryloop.foundation.config import clear_settings_cache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SleepRecorder:
    """Sleep replacement that records requested delays without blocking."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class Flaky:
    """Operation that fails a fixed number of times, then succeeds.

    Each failure raises a distinct exception so tests can tell which attempt
    produced the returned error.
    """

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0
        self.errors: list[Exception] = []

    def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            err = ConnectionError(f"attempt {self.calls} failed")
            self.errors.append(err)
            raise err
        return "ok"


@pytest.fixture(autouse=True)
def clean_settings() -> Iterator[None]:
    """Reload settings from the environment for every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def clean_logging() -> Iterator[None]:
    """Drop handlers configure_logging() attached during a test."""
    yield
    logger = logging.getLogger("retryloop")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def patched_sleep(monkeypatch: pytest.MonkeyPatch) -> SleepRecorder:
    """Replace time.sleep for the named variants, which use the default sleep."""
    import time

    recorder = SleepRecorder()
    monkeypatch.setattr(time, "sleep", recorder)
    return recorder
