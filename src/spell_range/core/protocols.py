"""Protocols (interfaces) for the host collaborators."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from spell_range.core.types import (
        CatalogItem,
        CatalogKind,
        EventKind,
        HostEvent,
        PetActionInfo,
        SlotInfo,
        SpellIdentifier,
    )


@runtime_checkable
class SpellbookOracle(Protocol):
    """The host's native spellbook and range primitives.

    Every call is synchronous. None means the host could not answer.
    """

    def enumerate_catalog(self, kind: CatalogKind) -> Iterable[CatalogItem]:
        """Enumerate every slot of a spellbook."""
        ...

    def slot_info(self, slot: int, kind: CatalogKind) -> SlotInfo | None:
        """Name and spell ID in a spellbook slot."""
        ...

    def slot_range_query(self, slot: int, kind: CatalogKind, unit: str) -> bool | None:
        """Is the spell in a spellbook slot in range of unit."""
        ...

    def slot_has_range_query(self, slot: int, kind: CatalogKind) -> bool | None:
        """Does the spell in a spellbook slot have a range."""
        ...

    def companion_exists(self) -> bool:
        """Is a companion currently summoned."""
        ...

    def companion_action_info(self, action_slot: int) -> PetActionInfo | None:
        """State of a companion action bar slot."""
        ...

    def resolve_name_from_id(self, spell_id: int) -> str | None:
        """Display name for a spell ID."""
        ...

    def spell_link(self, name: str) -> str | None:
        """Formatted link for a spell name."""
        ...

    def units_equal(self, a: str, b: str) -> bool:
        """Do two unit references point at the same unit."""
        ...

    def name_range_query(self, name: str, unit: str) -> bool | None:
        """Native name-only range check."""
        ...

    def name_has_range_query(self, name: str) -> bool | None:
        """Native name-only has-range check."""
        ...


@runtime_checkable
class DirectRangeOracle(Protocol):
    """Optional host primitives that accept IDs and names alike."""

    def direct_range_query(self, identifier: SpellIdentifier, unit: str) -> bool | None:
        ...

    def direct_has_range_query(self, identifier: SpellIdentifier) -> bool | None:
        ...


@runtime_checkable
class EventSource(Protocol):
    """Delivers host events to subscribed handlers."""

    def subscribe(self, kind: EventKind, handler: Callable[[HostEvent], None]) -> None:
        ...
