"""spell-range: spell range checks by spell ID or name.

Works around three gaps of the host's native range check:
- it only accepts spell names or spellbook slots, not spell IDs
- it does not follow talent override (replacement) spells
- companion (pet) spells take a less reliable code path

Plus:
- Time-boxed result cache with bounded expiry sweeps
- Event-driven spellbook index rebuilds, coalesced per tick
- Load shedding for low-priority units

Example:
    >>> from spell_range import SpellRange
    >>> from spell_range.host import EventBus, load_snapshot
    >>>
    >>> spell_range = SpellRange(load_snapshot("snapshot.json"), events=EventBus())
    >>> report = spell_range.tick()
    >>> spell_range.is_spell_in_range(133, "target")
    1
    >>> spell_range.spell_has_range("Growl")
    1
"""

from spell_range.core.config import RangeConfig
from spell_range.core.exceptions import HostSnapshotError, SpellRangeError
from spell_range.core.protocols import DirectRangeOracle, EventSource, SpellbookOracle
from spell_range.core.types import (
    CatalogItem,
    CatalogKind,
    EventKind,
    HostEvent,
    ItemType,
    PetActionInfo,
    RangeResult,
    SlotInfo,
)
from spell_range.library import SpellRange
from spell_range.scheduler.invalidation import RebuildFlag, TickReport
from spell_range.state import RangeState
from spell_range.temporal.clock import Clock, FakeClock, SystemClock

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "SpellRange",
    "RangeState",
    "RangeConfig",
    "RangeResult",
    # Host protocols
    "SpellbookOracle",
    "DirectRangeOracle",
    "EventSource",
    # Host data
    "CatalogItem",
    "CatalogKind",
    "EventKind",
    "HostEvent",
    "ItemType",
    "PetActionInfo",
    "SlotInfo",
    # Scheduling
    "RebuildFlag",
    "TickReport",
    # Time
    "Clock",
    "FakeClock",
    "SystemClock",
    # Errors
    "SpellRangeError",
    "HostSnapshotError",
]
