"""Invalidation scheduler: event flags consumed by a periodic tick.

Event handlers only raise flags. The tick is the single place where the
indexes are rebuilt and the result cache is swept, so a burst of events
between two ticks costs one rebuild.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import TYPE_CHECKING, Any

from spell_range.core.types import CatalogKind, EventKind, HostEvent

if TYPE_CHECKING:
    from spell_range.core.protocols import EventSource
    from spell_range.state import RangeState

logger = logging.getLogger(__name__)


class RebuildFlag(Flag):
    """Pending rebuild requests."""

    NONE = 0
    PRIMARY_CATALOG = auto()
    COMPANION_CATALOG = auto()
    COMPANION_ACTIONS = auto()

    CATALOGS = PRIMARY_CATALOG | COMPANION_CATALOG
    ALL = PRIMARY_CATALOG | COMPANION_CATALOG | COMPANION_ACTIONS


class SchedulerState(Enum):
    IDLE = "idle"
    TICK_DUE = "tick_due"


@dataclass
class TickReport:
    """What a tick did."""

    at: float
    rebuilt: RebuildFlag = RebuildFlag.NONE
    swept: int = 0
    sweep_ran: bool = False
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def did_work(self) -> bool:
        return bool(self.rebuilt) or self.sweep_ran

    @property
    def rebuilt_names(self) -> list[str]:
        return flag_names(self.rebuilt)


class InvalidationScheduler:
    """Coalesces host events into rebuilds applied on the next due tick."""

    def __init__(self, state: RangeState) -> None:
        self._state = state
        self._pending = RebuildFlag.NONE
        self._last_tick: float | None = None
        self._last_sweep = state.clock.now()
        self._tick_count = 0
        self._rebuilds = {flag.name: 0 for flag in _REBUILD_ORDER}

    @property
    def pending(self) -> RebuildFlag:
        return self._pending

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def state(self, now: float | None = None) -> SchedulerState:
        if now is None:
            now = self._state.clock.now()
        if self._pending or self._sweep_due(now):
            return SchedulerState.TICK_DUE
        return SchedulerState.IDLE

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def attach(self, events: EventSource) -> None:
        """Subscribe to every event kind that can invalidate the indexes."""
        for kind in EventKind:
            events.subscribe(kind, self.handle_event)

    def handle_event(self, event: HostEvent) -> None:
        """Raise rebuild flags for an event. Never rebuilds inline."""
        if event.kind in (EventKind.COMPANION_BAR_CHANGED, EventKind.TARGET_CHANGED):
            # Companion "checks range" reporting depends on having a target
            self.request(RebuildFlag.COMPANION_ACTIONS)
        elif event.kind is EventKind.CATALOG_CHANGED:
            self.request(RebuildFlag.CATALOGS)
        elif event.kind is EventKind.SETTING_CHANGED:
            if event.arg == self._state.config.rank_setting_name:
                self.request(RebuildFlag.CATALOGS)

    def request(self, flags: RebuildFlag) -> None:
        self._pending |= flags

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, now: float | None = None, *, force: bool = False) -> TickReport | None:
        """Apply pending rebuilds and sweep the cache when due.

        Returns None when called sooner than the tick interval after the
        previous tick (unless ``force``).
        """
        config = self._state.config
        if now is None:
            now = self._state.clock.now()
        if (
            not force
            and self._last_tick is not None
            and now - self._last_tick < config.tick_interval
        ):
            return None
        self._last_tick = now
        self._tick_count += 1

        report = TickReport(at=now)
        for flag in _REBUILD_ORDER:
            if flag in self._pending:
                report.counts[flag.name] = self._rebuild(flag)
                # Cleared only once the rebuild has completed
                self._pending &= ~flag
                report.rebuilt |= flag
                self._rebuilds[flag.name] += 1

        if self._sweep_due(now):
            report.swept = self._state.results.sweep(now, budget=config.sweep_budget)
            report.sweep_ran = True
            self._last_sweep = now

        if report.rebuilt:
            logger.debug("Tick #%d rebuilt %s", self._tick_count, report.rebuilt)
        return report

    def stats(self) -> dict[str, Any]:
        return {
            "ticks": self._tick_count,
            "pending": flag_names(self._pending),
            "rebuilds": dict(self._rebuilds),
        }

    def _sweep_due(self, now: float) -> bool:
        return now - self._last_sweep > self._state.config.sweep_interval

    def _rebuild(self, flag: RebuildFlag) -> int:
        if flag is RebuildFlag.PRIMARY_CATALOG:
            return self._state.catalog.rebuild(CatalogKind.PRIMARY)
        if flag is RebuildFlag.COMPANION_CATALOG:
            return self._state.catalog.rebuild(CatalogKind.COMPANION)
        return self._state.actions.rebuild()


_REBUILD_ORDER = (
    RebuildFlag.PRIMARY_CATALOG,
    RebuildFlag.COMPANION_CATALOG,
    RebuildFlag.COMPANION_ACTIONS,
)


def flag_names(flags: RebuildFlag) -> list[str]:
    """Names of the single rebuild flags set in flags, in rebuild order."""
    return [flag.name for flag in _REBUILD_ORDER if flag in flags]
