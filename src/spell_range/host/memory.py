"""In-memory host: a spellbook oracle and event bus backed by a HostSnapshot."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Iterator

from spell_range.core.types import (
    CatalogItem,
    CatalogKind,
    EventKind,
    HostEvent,
    ItemType,
    PetActionInfo,
    SlotInfo,
    SpellIdentifier,
)
from spell_range.host.snapshot import HostSnapshot, SpellbookEntry

logger = logging.getLogger(__name__)


class EventBus:
    """Synchronous publish/subscribe for host events."""

    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[Callable[[HostEvent], None]]] = defaultdict(list)

    def subscribe(self, kind: EventKind, handler: Callable[[HostEvent], None]) -> None:
        self._handlers[kind].append(handler)

    def publish(self, event: HostEvent) -> int:
        """Deliver an event. Returns the number of handlers called."""
        handlers = list(self._handlers.get(event.kind, ()))
        for handler in handlers:
            handler(event)
        return len(handlers)

    def emit(self, kind: EventKind, arg: str | None = None) -> int:
        return self.publish(HostEvent(kind=kind, arg=arg))


class SnapshotHost:
    """Spellbook oracle answering from a HostSnapshot.

    Offers only the name-based native checks; see DirectQuerySnapshotHost for
    a host that also accepts spell IDs directly.
    """

    def __init__(self, snapshot: HostSnapshot | None = None) -> None:
        self._snapshot = snapshot or HostSnapshot()

    @property
    def snapshot(self) -> HostSnapshot:
        return self._snapshot

    def load(self, snapshot: HostSnapshot) -> None:
        """Replace the host state."""
        self._snapshot = snapshot
        logger.info(
            "Loaded host snapshot: %d spells, %d pet spells, %d pet actions",
            len(snapshot.spellbook),
            len(snapshot.pet_spellbook),
            len(snapshot.pet_actions),
        )

    # ------------------------------------------------------------------
    # SpellbookOracle
    # ------------------------------------------------------------------

    def enumerate_catalog(self, kind: CatalogKind) -> list[CatalogItem]:
        return [
            CatalogItem(slot=entry.slot, item_type=entry.type, base_id=entry.base_id)
            for entry in self._book(kind)
        ]

    def slot_info(self, slot: int, kind: CatalogKind) -> SlotInfo | None:
        entry = self._entry(slot, kind)
        if entry is None:
            return None
        return SlotInfo(name=entry.name, spell_id=entry.spell_id)

    def slot_range_query(self, slot: int, kind: CatalogKind, unit: str) -> bool | None:
        entry = self._entry(slot, kind)
        if entry is None:
            return None
        return self._entry_in_range(entry, unit)

    def slot_has_range_query(self, slot: int, kind: CatalogKind) -> bool | None:
        entry = self._entry(slot, kind)
        return entry.has_range if entry is not None else None

    def companion_exists(self) -> bool:
        return self._snapshot.pet_exists

    def companion_action_info(self, action_slot: int) -> PetActionInfo | None:
        for action in self._snapshot.pet_actions:
            if action.slot == action_slot:
                return PetActionInfo(
                    name=action.name,
                    spell_id=action.spell_id,
                    checks_range=action.checks_range,
                    in_range=action.in_range,
                )
        return None

    def resolve_name_from_id(self, spell_id: int) -> str | None:
        for entry in self._all_entries():
            if entry.spell_id == spell_id and entry.name:
                return entry.name
        return self._snapshot.spell_names.get(spell_id)

    def spell_link(self, name: str) -> str | None:
        folded = name.casefold()
        for entry in self._all_entries():
            if entry.name and entry.name.casefold() == folded:
                if entry.link:
                    return entry.link
                if entry.spell_id is not None:
                    return _format_link(entry.spell_id, entry.name)
        for spell_id, known in self._snapshot.spell_names.items():
            if known.casefold() == folded:
                return _format_link(spell_id, known)
        return None

    def units_equal(self, a: str, b: str) -> bool:
        if a == b:
            return True
        units = self._snapshot.units
        guid = units.get(a)
        return guid is not None and guid == units.get(b)

    def name_range_query(self, name: str, unit: str) -> bool | None:
        # The native name check only knows the player's own spellbook
        entry = self._find(self._snapshot.spellbook, name)
        return self._entry_in_range(entry, unit) if entry is not None else None

    def name_has_range_query(self, name: str) -> bool | None:
        entry = self._find(self._snapshot.spellbook, name)
        return entry.has_range if entry is not None else None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _book(self, kind: CatalogKind) -> list[SpellbookEntry]:
        if kind is CatalogKind.PRIMARY:
            return self._snapshot.spellbook
        return self._snapshot.pet_spellbook

    def _entry(self, slot: int, kind: CatalogKind) -> SpellbookEntry | None:
        for entry in self._book(kind):
            if entry.slot == slot:
                return entry
        return None

    def _all_entries(self) -> Iterator[SpellbookEntry]:
        yield from self._snapshot.spellbook
        yield from self._snapshot.pet_spellbook

    def _entry_in_range(self, entry: SpellbookEntry, unit: str) -> bool | None:
        if unit in entry.in_range:
            return entry.in_range[unit]
        for other, value in entry.in_range.items():
            if self.units_equal(unit, other):
                return value
        return None

    @staticmethod
    def _find(entries: list[SpellbookEntry], identifier: SpellIdentifier) -> SpellbookEntry | None:
        """Entry matching a spell ID, base spell ID or (case-insensitive) name."""
        if isinstance(identifier, bool) or not isinstance(identifier, (int, str)):
            return None
        for entry in entries:
            if entry.type not in (ItemType.SPELL, ItemType.PET_ACTION):
                continue
            if isinstance(identifier, int):
                if identifier in (entry.spell_id, entry.base_id):
                    return entry
            elif entry.name and entry.name.casefold() == identifier.strip().casefold():
                return entry
        return None


class DirectQuerySnapshotHost(SnapshotHost):
    """SnapshotHost that also answers range queries by spell ID or name.

    Override spells are found through their base spell ID. Companion spells
    are only answered when the snapshot sets ``pet_direct_queries``.
    """

    def direct_range_query(self, identifier: SpellIdentifier, unit: str) -> bool | None:
        entry = self._direct_entry(identifier)
        return self._entry_in_range(entry, unit) if entry is not None else None

    def direct_has_range_query(self, identifier: SpellIdentifier) -> bool | None:
        entry = self._direct_entry(identifier)
        return entry.has_range if entry is not None else None

    def _direct_entry(self, identifier: SpellIdentifier) -> SpellbookEntry | None:
        if isinstance(identifier, str) and _is_spell_id(identifier.strip()):
            identifier = int(identifier)
        elif isinstance(identifier, float) and identifier.is_integer():
            identifier = int(identifier)
        entry = self._find(self._snapshot.spellbook, identifier)
        if entry is None and self._snapshot.pet_direct_queries:
            entry = self._find(self._snapshot.pet_spellbook, identifier)
        return entry


def _format_link(spell_id: int, name: str) -> str:
    return f"|cff71d5ff|Hspell:{spell_id}:0|h[{name}]|h|r"


def host_from_snapshot(snapshot: HostSnapshot) -> SnapshotHost:
    """Build the host flavor the snapshot asks for."""
    if snapshot.direct_queries:
        return DirectQuerySnapshotHost(snapshot)
    return SnapshotHost(snapshot)


def _is_spell_id(text: str) -> bool:
    return text.isascii() and text.isdigit()
