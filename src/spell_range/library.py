"""SpellRange, the process-level entry point.

Wires one RangeState, an InvalidationScheduler and a RangeResolver to a
host oracle and (optionally) a host event source.

Example:
    >>> from spell_range import SpellRange
    >>> from spell_range.host import EventBus, load_snapshot
    >>>
    >>> host = load_snapshot("snapshot.json")
    >>> bus = EventBus()
    >>> spell_range = SpellRange(host, events=bus)
    >>> report = spell_range.tick()  # builds the spellbook indexes
    >>> spell_range.is_spell_in_range("Fireball", "target")
    1
"""

from __future__ import annotations

import logging
from typing import Any

from spell_range.core.config import RangeConfig
from spell_range.core.protocols import DirectRangeOracle, EventSource, SpellbookOracle
from spell_range.core.types import HostEvent, RangeResult
from spell_range.resolution.resolver import RangeResolver
from spell_range.scheduler.invalidation import InvalidationScheduler, RebuildFlag, TickReport
from spell_range.state import RangeState
from spell_range.temporal.clock import Clock

logger = logging.getLogger(__name__)


class SpellRange:
    """Spell range checks by spell ID or name, for spellbook and companion spells."""

    def __init__(
        self,
        oracle: SpellbookOracle,
        events: EventSource | None = None,
        config: RangeConfig | None = None,
        clock: Clock | None = None,
        session_id: str | None = None,
    ) -> None:
        self._oracle = oracle
        self._state = RangeState.create(oracle, config=config, clock=clock, session_id=session_id)

        # The direct query primitive either exists for the whole process or not at all
        direct = oracle if isinstance(oracle, DirectRangeOracle) else None
        if direct is None:
            logger.info("Host has no direct range query, using spellbook lookups only")

        self._scheduler = InvalidationScheduler(self._state)
        self._resolver = RangeResolver(self._state, oracle, direct)

        # Initial indexes are built on the first tick
        self._scheduler.request(RebuildFlag.ALL)
        if events is not None:
            self._scheduler.attach(events)

    @property
    def state(self) -> RangeState:
        return self._state

    @property
    def scheduler(self) -> InvalidationScheduler:
        return self._scheduler

    @property
    def resolver(self) -> RangeResolver:
        return self._resolver

    @property
    def uses_direct_queries(self) -> bool:
        return self._resolver.uses_direct_queries

    @property
    def session_id(self) -> str:
        return self._state.session_id

    def is_spell_in_range(self, spell: Any, unit: str) -> int | None:
        """1 if in range of unit, 0 if out of range, None if unknown.

        ``spell`` is a spell ID or name from the player's or the companion's
        spellbook.
        """
        return self._resolver.is_in_range(spell, unit).as_int()

    def spell_has_range(self, spell: Any) -> int | None:
        """1 if the spell has a range, 0 if not, None if unknown."""
        return self._resolver.has_range(spell).as_int()

    def check_range(self, spell: Any, unit: str) -> RangeResult:
        return self._resolver.is_in_range(spell, unit)

    def check_has_range(self, spell: Any) -> RangeResult:
        return self._resolver.has_range(spell)

    def handle_event(self, event: HostEvent) -> None:
        self._scheduler.handle_event(event)

    def tick(self, *, force: bool = False) -> TickReport | None:
        """Host periodic callback."""
        return self._scheduler.tick(force=force)

    def stats(self) -> dict[str, Any]:
        return {
            "session_id": self._state.session_id,
            "cache": self._state.results.stats(),
            "scheduler": self._scheduler.stats(),
            "resolver": self._resolver.stats(),
            "actions_indexed": self._state.actions.size,
        }
