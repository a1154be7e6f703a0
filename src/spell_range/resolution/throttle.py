"""Load shedding for queries against low-priority units."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import IntEnum

from spell_range.temporal.clock import Clock

logger = logging.getLogger(__name__)


class TargetPriority(IntEnum):
    """Unit priority. Lower value = higher priority."""

    HIGH = 0  # Allowlisted units, never throttled
    LOW = 1  # Nameplates, raid members and the like


class LoadShedder:
    """Admits at most one low-priority resolution per interval.

    A shed query gets INDETERMINATE from the resolver, never a stale answer.
    """

    def __init__(self, clock: Clock, interval: float, priority_units: Iterable[str]) -> None:
        self._clock = clock
        self._interval = interval
        self._priority_units = frozenset(priority_units)
        self._last_admitted: float | None = None
        self._shed = 0
        self._admitted = 0

    def priority(self, unit: str | None) -> TargetPriority:
        if unit is not None and unit in self._priority_units:
            return TargetPriority.HIGH
        return TargetPriority.LOW

    def admit(self, unit: str | None) -> bool:
        if self.priority(unit) is TargetPriority.HIGH:
            return True
        now = self._clock.now()
        if self._last_admitted is not None and now - self._last_admitted < self._interval:
            self._shed += 1
            return False
        self._last_admitted = now
        self._admitted += 1
        return True

    @property
    def shed_count(self) -> int:
        return self._shed

    @property
    def admitted_count(self) -> int:
        return self._admitted
