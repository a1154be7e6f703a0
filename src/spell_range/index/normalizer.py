"""Identifier classification and canonicalization."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any, Generic, TypeVar

from spell_range.core.types import CanonicalKey, IdentifierKind

V = TypeVar("V")

_MISSING = object()


class BoundedMemo(Generic[V]):
    """Memoizes a one-argument function in a least-recently-used mapping.

    Holds at most ``maxsize`` inputs; the least recently used entry is dropped
    when a new input would exceed that.
    """

    def __init__(self, func: Callable[[Any], V], maxsize: int = 2048) -> None:
        self._func = func
        self._maxsize = maxsize
        self._entries: OrderedDict[Hashable, V] = OrderedDict()

    def __call__(self, value: Hashable) -> V:
        # 1 and True hash alike; keep the type in the key
        key = (type(value), value)
        cached = self._entries.get(key, _MISSING)
        if cached is not _MISSING:
            self._entries.move_to_end(key)
            return cached  # type: ignore[return-value]
        result = self._func(value)
        self._entries[key] = result
        if len(self._entries) > self._maxsize:
            self._entries.popitem(last=False)
        return result

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()


def _to_number(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        # Plain ASCII digits only: no sign, underscores or other scripts
        text = value.strip()
        if text.isascii() and text.isdigit():
            return int(text)
        return None
    return None


def _fold(value: Any) -> CanonicalKey | None:
    number = _to_number(value)
    if number is not None:
        return number
    if not isinstance(value, str):
        return None
    folded = value.strip().casefold()
    return folded or None


class IdentifierNormalizer:
    """Classifies spell identifiers and produces canonical map keys.

    Numeric identifiers (ints, integral floats, or strings of plain ASCII
    digits) map to their int value; names map to their case-folded form.
    None, empty strings and unhashable values canonicalize to None.
    """

    def __init__(self, memo_size: int = 2048) -> None:
        self._numbers: BoundedMemo[int | None] = BoundedMemo(_to_number, memo_size)
        self._canonical: BoundedMemo[CanonicalKey | None] = BoundedMemo(_fold, memo_size)

    def to_number(self, value: Any) -> int | None:
        """Numeric spell ID for value, or None if it is not numeric."""
        if value is None or not isinstance(value, Hashable):
            return None
        return self._numbers(value)

    def classify(self, value: Any) -> IdentifierKind:
        if self.to_number(value) is not None:
            return IdentifierKind.NUMERIC
        return IdentifierKind.TEXTUAL

    def canonicalize(self, value: Any) -> CanonicalKey | None:
        if value is None or not isinstance(value, Hashable):
            return None
        return self._canonical(value)

    @property
    def memo_sizes(self) -> tuple[int, int]:
        return len(self._numbers), len(self._canonical)

    def clear(self) -> None:
        self._numbers.clear()
        self._canonical.clear()
