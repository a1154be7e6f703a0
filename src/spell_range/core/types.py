"""Core data types for spell range resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

# A raw spell reference as callers pass it: numeric spell ID or display name.
SpellIdentifier = Union[int, str]

# Canonical map key: an int spell ID or a case-folded name.
CanonicalKey = Union[int, str]


class RangeResult(Enum):
    """Tri-state answer to a range query.

    For has-range queries IN_RANGE means "the spell has a range".
    """

    IN_RANGE = 1
    OUT_OF_RANGE = 0
    INDETERMINATE = None

    @classmethod
    def from_bool(cls, value: bool | None) -> RangeResult:
        """Standardize an oracle answer (True / False / None)."""
        if value is None:
            return cls.INDETERMINATE
        return cls.IN_RANGE if value else cls.OUT_OF_RANGE

    @property
    def is_known(self) -> bool:
        return self is not RangeResult.INDETERMINATE

    def as_int(self) -> int | None:
        """Legacy return value: 1, 0 or None."""
        return self.value


class CatalogKind(Enum):
    """The two spellbooks an actor owns."""

    PRIMARY = "spell"
    COMPANION = "pet"


class QueryKind(Enum):
    """Kinds of cached queries."""

    IN_RANGE = "range"
    HAS_RANGE = "has_range"


class IdentifierKind(Enum):
    """Classification of a raw spell identifier."""

    NUMERIC = "numeric"
    TEXTUAL = "textual"


class ItemType(Enum):
    """Spellbook slot item types reported by the host."""

    SPELL = "SPELL"
    PET_ACTION = "PETACTION"
    FLYOUT = "FLYOUT"
    FUTURE_SPELL = "FUTURESPELL"
    NONE = "NONE"

    @property
    def is_active(self) -> bool:
        """Only castable items are indexed."""
        return self in (ItemType.SPELL, ItemType.PET_ACTION)


@dataclass(frozen=True)
class CatalogItem:
    """One enumerated spellbook slot."""

    slot: int
    item_type: ItemType
    base_id: int | None = None


@dataclass(frozen=True)
class SlotInfo:
    """Name and (optional) spell ID currently occupying a spellbook slot."""

    name: str | None
    spell_id: int | None = None


@dataclass(frozen=True)
class PetActionInfo:
    """State of one companion action bar slot."""

    name: str | None
    spell_id: int | None
    checks_range: bool = False
    in_range: bool = False


class EventKind(Enum):
    """Host notifications that invalidate the indexes."""

    CATALOG_CHANGED = "SPELLS_CHANGED"
    COMPANION_BAR_CHANGED = "PET_BAR_UPDATE"
    TARGET_CHANGED = "PLAYER_TARGET_CHANGED"
    SETTING_CHANGED = "CVAR_UPDATE"


@dataclass(frozen=True)
class HostEvent:
    """A delivered host event. ``arg`` carries the setting name for SETTING_CHANGED."""

    kind: EventKind
    arg: str | None = None


@dataclass(frozen=True)
class CacheKey:
    """Result cache key. ``unit`` is None for has-range queries."""

    session: str
    query: QueryKind
    identifier: CanonicalKey
    unit: str | None = None
