"""Core types, protocols and configuration."""

from spell_range.core.config import DEFAULT_PRIORITY_UNITS, RangeConfig
from spell_range.core.exceptions import HostSnapshotError, SpellRangeError
from spell_range.core.protocols import DirectRangeOracle, EventSource, SpellbookOracle
from spell_range.core.types import (
    CacheKey,
    CanonicalKey,
    CatalogItem,
    CatalogKind,
    EventKind,
    HostEvent,
    IdentifierKind,
    ItemType,
    PetActionInfo,
    QueryKind,
    RangeResult,
    SlotInfo,
    SpellIdentifier,
)
from spell_range.core.utils import parse_spell_id_from_link

__all__ = [
    "DEFAULT_PRIORITY_UNITS",
    "CacheKey",
    "CanonicalKey",
    "CatalogItem",
    "CatalogKind",
    "DirectRangeOracle",
    "EventKind",
    "EventSource",
    "HostEvent",
    "HostSnapshotError",
    "IdentifierKind",
    "ItemType",
    "PetActionInfo",
    "QueryKind",
    "RangeConfig",
    "RangeResult",
    "SlotInfo",
    "SpellIdentifier",
    "SpellRangeError",
    "SpellbookOracle",
    "parse_spell_id_from_link",
]
