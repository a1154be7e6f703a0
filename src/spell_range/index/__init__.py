"""Identifier normalization and spellbook / action bar indexes."""

from spell_range.index.catalog import CatalogIndex
from spell_range.index.companion import NUM_PET_ACTION_SLOTS, CompanionActionIndex
from spell_range.index.normalizer import BoundedMemo, IdentifierNormalizer

__all__ = [
    "NUM_PET_ACTION_SLOTS",
    "BoundedMemo",
    "CatalogIndex",
    "CompanionActionIndex",
    "IdentifierNormalizer",
]
