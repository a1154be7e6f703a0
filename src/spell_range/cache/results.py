"""Time-boxed cache of resolved range results."""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any

from spell_range.core.types import CacheKey, RangeResult
from spell_range.temporal.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

DEFAULT_TTL = 1.5
DEFAULT_SWEEP_BUDGET = 50


@dataclass
class CacheEntry:
    result: RangeResult
    stored_at: float


class ResultCache:
    """Result cache with a validity window and bounded expiry sweeps.

    Entries older than the validity window are never returned. They are
    physically removed by ``sweep`` once older than twice the window.
    Entries are kept in write order so a sweep can stop at the first
    entry that is still young enough.
    """

    def __init__(self, clock: Clock | None = None, ttl: float = DEFAULT_TTL) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self._clock = clock or SystemClock()
        self._ttl = ttl
        self._entries: OrderedDict[CacheKey, CacheEntry] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: CacheKey) -> RangeResult | None:
        """Cached result, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None or self._clock.now() - entry.stored_at >= self._ttl:
            self._misses += 1
            return None
        self._hits += 1
        return entry.result

    def put(self, key: CacheKey, result: RangeResult) -> None:
        """Store a result, replacing any previous entry for key."""
        self._entries.pop(key, None)
        self._entries[key] = CacheEntry(result=result, stored_at=self._clock.now())

    def sweep(self, now: float | None = None, budget: int = DEFAULT_SWEEP_BUDGET) -> int:
        """Evict entries older than twice the validity window.

        Stops after ``budget`` removals. Returns the number removed.
        """
        if now is None:
            now = self._clock.now()
        cutoff = self._ttl * 2
        removed = 0
        while self._entries and removed < budget:
            key, entry = next(iter(self._entries.items()))
            if now - entry.stored_at <= cutoff:
                break
            del self._entries[key]
            removed += 1
        if removed:
            self._evictions += removed
            logger.debug("Swept %d expired range results (%d left)", removed, len(self._entries))
        return removed

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> dict[str, Any]:
        total = self._hits + self._misses
        return {
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "hit_rate": round(self._hits / total, 3) if total else 0.0,
        }
