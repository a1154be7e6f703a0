"""Companion action bar index."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from spell_range.core.types import CanonicalKey

if TYPE_CHECKING:
    from spell_range.core.protocols import SpellbookOracle
    from spell_range.index.normalizer import IdentifierNormalizer

logger = logging.getLogger(__name__)

NUM_PET_ACTION_SLOTS = 10


class CompanionActionIndex:
    """Maps companion spells to their action bar slots.

    Also remembers every companion spell that was ever seen checking range.
    That memory is never cleared: whether a companion spell has a range does
    not depend on the current loadout, and the host's own has-range answer for
    companion spells cannot be trusted.
    """

    def __init__(
        self,
        oracle: SpellbookOracle,
        normalizer: IdentifierNormalizer,
        num_slots: int = NUM_PET_ACTION_SLOTS,
    ) -> None:
        self._oracle = oracle
        self._normalizer = normalizer
        self._num_slots = num_slots
        self._actions: dict[CanonicalKey, int] = {}
        self._has_range: set[CanonicalKey] = set()
        self._rebuild_count = 0

    def rebuild(self) -> int:
        """Re-read the companion action bar. Returns the number of ranged slots."""
        actions: dict[CanonicalKey, int] = {}
        self._rebuild_count += 1

        if not self._oracle.companion_exists():
            self._actions = actions
            logger.debug("No companion present, cleared action index")
            return 0

        for slot in range(1, self._num_slots + 1):
            info = self._oracle.companion_action_info(slot)
            if info is None or not info.checks_range:
                continue
            name_key = self._normalizer.canonicalize(info.name)
            # A purely numeric action name would alias a spell ID key
            if not isinstance(name_key, str):
                name_key = None
            id_key = self._normalizer.canonicalize(info.spell_id)
            for key in (name_key, id_key):
                if key is None:
                    continue
                actions[key] = slot
                self._has_range.add(key)

        self._actions = actions
        logger.debug("Rebuilt companion action index: %d keys", len(actions))
        return len(set(actions.values()))

    def lookup(self, identifier: Any) -> int | None:
        """Action slot for a companion spell, or None."""
        key = self._normalizer.canonicalize(identifier)
        if key is None:
            return None
        return self._actions.get(key)

    def has_ever_had_range(self, identifier: Any) -> bool:
        key = self._normalizer.canonicalize(identifier)
        return key is not None and key in self._has_range

    @property
    def size(self) -> int:
        return len(self._actions)

    @property
    def rebuild_count(self) -> int:
        return self._rebuild_count
