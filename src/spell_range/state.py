"""Owned state shared by the scheduler and the resolver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import uuid4

from spell_range.cache.results import ResultCache
from spell_range.core.config import RangeConfig
from spell_range.index.catalog import CatalogIndex
from spell_range.index.companion import CompanionActionIndex
from spell_range.index.normalizer import IdentifierNormalizer
from spell_range.temporal.clock import Clock, SystemClock

if TYPE_CHECKING:
    from spell_range.core.protocols import SpellbookOracle


@dataclass
class RangeState:
    """All mutable lookup state for one actor session.

    Built once per process and handed to the scheduler and resolver, which
    never keep state of their own beyond timing bookkeeping.
    """

    config: RangeConfig
    clock: Clock
    normalizer: IdentifierNormalizer
    catalog: CatalogIndex
    actions: CompanionActionIndex
    results: ResultCache
    session_id: str = field(default_factory=lambda: uuid4().hex[:8])

    @classmethod
    def create(
        cls,
        oracle: SpellbookOracle,
        config: RangeConfig | None = None,
        clock: Clock | None = None,
        session_id: str | None = None,
    ) -> RangeState:
        config = config or RangeConfig()
        clock = clock or SystemClock()
        normalizer = IdentifierNormalizer(memo_size=config.memo_size)
        state = cls(
            config=config,
            clock=clock,
            normalizer=normalizer,
            catalog=CatalogIndex(oracle, normalizer),
            actions=CompanionActionIndex(oracle, normalizer, num_slots=config.pet_action_slots),
            results=ResultCache(clock, ttl=config.cache_ttl),
        )
        if session_id:
            state.session_id = session_id
        return state
