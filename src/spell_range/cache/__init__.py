"""Result cache for range queries."""

from spell_range.cache.results import CacheEntry, ResultCache

__all__ = [
    "CacheEntry",
    "ResultCache",
]
