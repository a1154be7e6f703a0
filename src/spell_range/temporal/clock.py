"""Time abstraction for testability."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Abstract clock interface.

    Times are float seconds on a monotonic scale; only differences matter.
    """

    @abstractmethod
    def now(self) -> float:
        """Get current time."""
        ...


class SystemClock(Clock):
    """Real monotonic time."""

    def now(self) -> float:
        return time.monotonic()


class FakeClock(Clock):
    """Controllable clock for testing."""

    def __init__(self, initial: float = 0.0) -> None:
        self._now = initial

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float = 0.0, *, milliseconds: float = 0.0) -> None:
        """Advance time by the given duration."""
        if seconds < 0 or milliseconds < 0:
            raise ValueError("Cannot advance by a negative duration")
        self._now += seconds + milliseconds / 1000.0

    def set(self, value: float) -> None:
        """Set clock to a specific time."""
        self._now = value

    def advance_to(self, value: float) -> None:
        """Advance clock to a specific time (must be in future)."""
        if value < self._now:
            raise ValueError("Cannot advance to a time in the past")
        self._now = value
