"""Time sources for cache expiry and tick spacing."""

from spell_range.temporal.clock import Clock, FakeClock, SystemClock

__all__ = [
    "Clock",
    "FakeClock",
    "SystemClock",
]
