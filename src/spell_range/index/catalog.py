"""Spellbook name/ID → slot index for the primary and companion spellbooks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from spell_range.core.types import CatalogKind, ItemType
from spell_range.core.utils import parse_spell_id_from_link

if TYPE_CHECKING:
    from spell_range.core.protocols import SpellbookOracle
    from spell_range.index.normalizer import IdentifierNormalizer

logger = logging.getLogger(__name__)


@dataclass
class _BookMaps:
    by_name: dict[str, int] = field(default_factory=dict)
    by_id: dict[int, int] = field(default_factory=dict)

    def add(self, name: str | None, spell_id: int | None, slot: int) -> None:
        # First writer wins: active spells are enumerated before passive
        # duplicates that share their name.
        if name:
            self.by_name.setdefault(name, slot)
        if spell_id is not None:
            self.by_id.setdefault(spell_id, slot)


class CatalogIndex:
    """Bidirectional lookup from spell names and IDs to spellbook slots.

    Each spellbook is rebuilt wholesale from the oracle; slots from an older
    build are never carried over. Override spells are also indexed under their
    base spell's name and ID so pre-talent identifiers resolve to the slot
    holding the replacement.
    """

    def __init__(self, oracle: SpellbookOracle, normalizer: IdentifierNormalizer) -> None:
        self._oracle = oracle
        self._normalizer = normalizer
        self._books: dict[CatalogKind, _BookMaps] = {kind: _BookMaps() for kind in CatalogKind}
        self._rebuild_counts: dict[CatalogKind, int] = {kind: 0 for kind in CatalogKind}

    def rebuild(self, kind: CatalogKind) -> int:
        """Re-enumerate one spellbook. Returns the number of indexed slots."""
        book = _BookMaps()
        indexed = 0
        items = sorted(self._oracle.enumerate_catalog(kind), key=lambda item: item.slot)

        for item in items:
            if not item.item_type.is_active:
                continue
            info = self._oracle.slot_info(item.slot, kind)
            if info is None:
                continue

            spell_id = info.spell_id
            if spell_id is None and info.name:
                spell_id = parse_spell_id_from_link(self._oracle.spell_link(info.name))

            book.add(self._name_key(info.name), spell_id, item.slot)
            indexed += 1

            # Base spells are only tracked for player spells
            if item.item_type is ItemType.SPELL and item.base_id is not None:
                base_name = self._oracle.resolve_name_from_id(item.base_id)
                book.add(self._name_key(base_name), item.base_id, item.slot)

        self._books[kind] = book
        self._rebuild_counts[kind] += 1
        logger.debug(
            "Rebuilt %s spellbook index: %d slots, %d names, %d ids",
            kind.value,
            indexed,
            len(book.by_name),
            len(book.by_id),
        )
        return indexed

    def lookup(self, kind: CatalogKind, identifier: Any) -> int | None:
        """Slot holding identifier in the given spellbook, or None."""
        key = self._normalizer.canonicalize(identifier)
        if key is None:
            return None
        book = self._books[kind]
        if isinstance(key, int):
            return book.by_id.get(key)
        return book.by_name.get(key)

    def clear(self, kind: CatalogKind | None = None) -> None:
        kinds = [kind] if kind is not None else list(CatalogKind)
        for k in kinds:
            self._books[k] = _BookMaps()

    def size(self, kind: CatalogKind) -> tuple[int, int]:
        """(names, ids) currently indexed for a spellbook."""
        book = self._books[kind]
        return len(book.by_name), len(book.by_id)

    def rebuild_count(self, kind: CatalogKind) -> int:
        return self._rebuild_counts[kind]

    def _name_key(self, name: str | None) -> str | None:
        if not name:
            return None
        key = self._normalizer.canonicalize(name)
        # A purely numeric display name would collide with the ID map
        return key if isinstance(key, str) else None
