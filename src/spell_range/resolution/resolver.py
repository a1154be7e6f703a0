"""RangeResolver: cache → direct query → spellbook index → action bar."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, Any

from spell_range.core.types import CacheKey, CatalogKind, QueryKind, RangeResult
from spell_range.resolution.throttle import LoadShedder

if TYPE_CHECKING:
    from spell_range.core.protocols import DirectRangeOracle, SpellbookOracle
    from spell_range.core.types import CanonicalKey
    from spell_range.state import RangeState

logger = logging.getLogger(__name__)

PRIMARY_TARGET = "target"


class RangeResolver:
    """Answers in-range and has-range queries for spells by ID or name.

    Resolution order:
      1. Load shedding (low-priority units only, in-range queries only)
      2. Result cache
      3. Direct host query, when the host offers one
      4. Player spellbook, then companion spellbook, then the companion
         action bar (primary target only)
      5. For IDs that resolve nowhere: one retry by the spell's name

    Only definite answers are cached; INDETERMINATE is recomputed each time.
    """

    def __init__(
        self,
        state: RangeState,
        oracle: SpellbookOracle,
        direct: DirectRangeOracle | None = None,
    ) -> None:
        self._state = state
        self._oracle = oracle
        self._direct = direct
        self._shedder = LoadShedder(
            state.clock,
            state.config.tick_interval,
            state.config.priority_units,
        )
        self._resolved_by: Counter[str] = Counter()

    @property
    def uses_direct_queries(self) -> bool:
        return self._direct is not None

    @property
    def shedder(self) -> LoadShedder:
        return self._shedder

    # ------------------------------------------------------------------
    # Public queries
    # ------------------------------------------------------------------

    def is_in_range(self, identifier: Any, unit: str | None) -> RangeResult:
        """Is the spell usable against unit from the current position."""
        if identifier is None or not unit:
            return RangeResult.INDETERMINATE
        if not self._shedder.admit(unit):
            return RangeResult.INDETERMINATE

        key = self._state.normalizer.canonicalize(identifier)
        if key is None:
            return RangeResult.INDETERMINATE

        cache_key = CacheKey(self._state.session_id, QueryKind.IN_RANGE, key, unit)
        cached = self._state.results.get(cache_key)
        if cached is not None:
            return cached

        result = self._resolve_in_range(identifier, unit, allow_rename=True)
        if result.is_known:
            self._state.results.put(cache_key, result)
        else:
            logger.debug("Range of %r on %s is indeterminate", identifier, unit)
        return result

    def has_range(self, identifier: Any) -> RangeResult:
        """Does the spell have a range at all."""
        if identifier is None:
            return RangeResult.INDETERMINATE
        key = self._state.normalizer.canonicalize(identifier)
        if key is None:
            return RangeResult.INDETERMINATE

        cache_key = CacheKey(self._state.session_id, QueryKind.HAS_RANGE, key)
        cached = self._state.results.get(cache_key)
        if cached is not None:
            return cached

        result = self._resolve_has_range(identifier, allow_rename=True)
        if result.is_known:
            self._state.results.put(cache_key, result)
        return result

    def stats(self) -> dict[str, Any]:
        return {
            "direct_queries": self.uses_direct_queries,
            "shed": self._shedder.shed_count,
            "resolved_by": dict(self._resolved_by),
        }

    # ------------------------------------------------------------------
    # In range
    # ------------------------------------------------------------------

    def _resolve_in_range(self, identifier: Any, unit: str, allow_rename: bool) -> RangeResult:
        if self._direct is not None:
            result = RangeResult.from_bool(self._direct.direct_range_query(identifier, unit))
            if result.is_known:
                return self._tally("direct", result)

        normalizer = self._state.normalizer
        spell_id = normalizer.to_number(identifier)
        if spell_id is not None:
            settled = self._indexed_in_range(spell_id, unit)
            if settled is not None:
                return settled
            # Lower ranks of a spell are not in the spellbook unless
            # "show all ranks" is on, so retry once by name.
            if allow_rename:
                name = self._oracle.resolve_name_from_id(spell_id)
                if name:
                    return self._resolve_in_range(name, unit, allow_rename=False)
            return RangeResult.INDETERMINATE

        key = normalizer.canonicalize(identifier)
        if key is None:
            return RangeResult.INDETERMINATE
        settled = self._indexed_in_range(key, unit)
        if settled is not None:
            return settled
        if self._direct is None:
            result = RangeResult.from_bool(self._oracle.name_range_query(str(identifier), unit))
            return self._tally("name", result)
        return RangeResult.INDETERMINATE

    def _indexed_in_range(self, key: CanonicalKey, unit: str) -> RangeResult | None:
        """Range via the indexes. None means no index settled the query."""
        catalog = self._state.catalog

        slot = catalog.lookup(CatalogKind.PRIMARY, key)
        if slot is not None:
            result = RangeResult.from_bool(
                self._oracle.slot_range_query(slot, CatalogKind.PRIMARY, unit)
            )
            return self._tally("primary", result)

        slot = catalog.lookup(CatalogKind.COMPANION, key)
        if slot is None:
            return None
        result = RangeResult.from_bool(
            self._oracle.slot_range_query(slot, CatalogKind.COMPANION, unit)
        )
        if result.is_known:
            return self._tally("companion", result)

        # The companion spellbook often cannot answer; the action bar can,
        # but only for the player's current target.
        action_slot = self._state.actions.lookup(key)
        if action_slot is None or not self._is_primary_target(unit):
            return None
        info = self._oracle.companion_action_info(action_slot)
        if info is None:
            return None
        return self._tally("action", RangeResult.from_bool(info.in_range))

    def _is_primary_target(self, unit: str) -> bool:
        return unit == PRIMARY_TARGET or self._oracle.units_equal(unit, PRIMARY_TARGET)

    # ------------------------------------------------------------------
    # Has range
    # ------------------------------------------------------------------

    def _resolve_has_range(self, identifier: Any, allow_rename: bool) -> RangeResult:
        if self._direct is not None:
            result = RangeResult.from_bool(self._direct.direct_has_range_query(identifier))
            if result.is_known:
                return self._tally("direct", result)

        normalizer = self._state.normalizer
        spell_id = normalizer.to_number(identifier)
        if spell_id is not None:
            settled = self._indexed_has_range(spell_id)
            if settled is not None:
                return settled
            if allow_rename:
                name = self._oracle.resolve_name_from_id(spell_id)
                if name:
                    return self._resolve_has_range(name, allow_rename=False)
            return RangeResult.INDETERMINATE

        key = normalizer.canonicalize(identifier)
        if key is None:
            return RangeResult.INDETERMINATE
        settled = self._indexed_has_range(key)
        if settled is not None:
            return settled
        if self._direct is None:
            result = RangeResult.from_bool(self._oracle.name_has_range_query(str(identifier)))
            return self._tally("name", result)
        return RangeResult.INDETERMINATE

    def _indexed_has_range(self, key: CanonicalKey) -> RangeResult | None:
        catalog = self._state.catalog

        slot = catalog.lookup(CatalogKind.PRIMARY, key)
        if slot is not None:
            result = RangeResult.from_bool(
                self._oracle.slot_has_range_query(slot, CatalogKind.PRIMARY)
            )
            return self._tally("primary", result)

        slot = catalog.lookup(CatalogKind.COMPANION, key)
        if slot is None:
            return None
        # The host's answer for companion spells is unreliable; fall back to
        # whether the action bar has ever reported the spell checking range.
        has_range = bool(self._oracle.slot_has_range_query(slot, CatalogKind.COMPANION))
        has_range = has_range or self._state.actions.has_ever_had_range(key)
        return self._tally("companion", RangeResult.from_bool(has_range))

    def _tally(self, path: str, result: RangeResult) -> RangeResult:
        if result.is_known:
            self._resolved_by[path] += 1
        return result
