"""Event-driven index invalidation."""

from spell_range.scheduler.invalidation import (
    InvalidationScheduler,
    RebuildFlag,
    SchedulerState,
    TickReport,
)

__all__ = [
    "InvalidationScheduler",
    "RebuildFlag",
    "SchedulerState",
    "TickReport",
]
