"""Configuration for range resolution."""

from __future__ import annotations

from dataclasses import dataclass, field


def _default_priority_units() -> frozenset[str]:
    units = {"player", "target", "focus", "mouseover"}
    units.update(f"arena{i}" for i in range(1, 6))
    units.update(f"boss{i}" for i in range(1, 6))
    units.update(f"party{i}" for i in range(1, 5))
    return frozenset(units)


DEFAULT_PRIORITY_UNITS = _default_priority_units()


@dataclass(frozen=True)
class RangeConfig:
    """Timing and sizing constants for the cache and scheduler.

    All durations are in seconds.
    """

    tick_interval: float = 0.2  # Minimum spacing between ticks and throttled queries
    cache_ttl: float = 1.5  # Validity window of a cached result
    sweep_interval: float = 3.0  # Spacing between expiry sweeps
    sweep_budget: int = 50  # Max evictions per sweep
    priority_units: frozenset[str] = field(default_factory=lambda: DEFAULT_PRIORITY_UNITS)
    pet_action_slots: int = 10
    memo_size: int = 2048  # Entries per normalizer memo
    rank_setting_name: str = "ShowAllSpellRanks"

    def __post_init__(self) -> None:
        if self.tick_interval < 0:
            raise ValueError("tick_interval cannot be negative")
        if self.cache_ttl <= 0:
            raise ValueError("cache_ttl must be positive")
        if self.sweep_interval <= 0:
            raise ValueError("sweep_interval must be positive")
        if self.sweep_budget < 1:
            raise ValueError("sweep_budget must be at least 1")
        if self.pet_action_slots < 0:
            raise ValueError("pet_action_slots cannot be negative")
        if self.memo_size < 1:
            raise ValueError("memo_size must be at least 1")
        # Accept any iterable of unit names
        object.__setattr__(self, "priority_units", frozenset(self.priority_units))

    def is_priority_unit(self, unit: str) -> bool:
        return unit in self.priority_units
