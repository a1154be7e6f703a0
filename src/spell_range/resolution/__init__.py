"""Query resolution and load shedding."""

from spell_range.resolution.resolver import PRIMARY_TARGET, RangeResolver
from spell_range.resolution.throttle import LoadShedder, TargetPriority

__all__ = [
    "PRIMARY_TARGET",
    "LoadShedder",
    "RangeResolver",
    "TargetPriority",
]
