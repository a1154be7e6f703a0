"""Pydantic models describing a host's spellbook and unit state."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from spell_range.core.exceptions import HostSnapshotError
from spell_range.core.types import ItemType


class SpellbookEntry(BaseModel):
    """One spellbook slot."""

    slot: int = Field(ge=1)
    type: ItemType = ItemType.SPELL
    name: str | None = None
    spell_id: int | None = None
    base_id: int | None = Field(default=None, description="Pre-override spell ID")
    link: str | None = None
    has_range: bool | None = None
    in_range: dict[str, bool] = Field(default_factory=dict, description="unit → in range")


class PetAction(BaseModel):
    """One companion action bar slot."""

    slot: int = Field(ge=1)
    name: str | None = None
    spell_id: int | None = None
    checks_range: bool = False
    in_range: bool = False


class HostSnapshot(BaseModel):
    """Everything the in-memory host answers queries from."""

    direct_queries: bool = Field(
        default=True,
        description="Whether the host offers range queries by spell ID",
    )
    pet_direct_queries: bool = Field(
        default=False,
        description="Whether direct queries also answer for companion spells",
    )
    spellbook: list[SpellbookEntry] = Field(default_factory=list)
    pet_spellbook: list[SpellbookEntry] = Field(default_factory=list)
    pet_exists: bool = False
    pet_actions: list[PetAction] = Field(default_factory=list)
    units: dict[str, str] = Field(
        default_factory=dict,
        description="unit reference → unit GUID, for unit equivalence",
    )
    spell_names: dict[int, str] = Field(
        default_factory=dict,
        description="Extra spell ID → name entries (e.g. lower ranks)",
    )

    def check(self) -> None:
        """Raise HostSnapshotError on duplicate slots."""
        for field_name in ("spellbook", "pet_spellbook", "pet_actions"):
            slots = [entry.slot for entry in getattr(self, field_name)]
            duplicates = sorted({s for s in slots if slots.count(s) > 1})
            if duplicates:
                raise HostSnapshotError(f"duplicate slots {duplicates}", field=field_name)


def parse_snapshot(data: dict | str | bytes) -> HostSnapshot:
    """Validate raw snapshot data (a dict or JSON text)."""
    try:
        if isinstance(data, (str, bytes)):
            snapshot = HostSnapshot.model_validate_json(data)
        else:
            snapshot = HostSnapshot.model_validate(data)
    except ValidationError as e:
        raise HostSnapshotError(str(e)) from e
    snapshot.check()
    return snapshot


def read_snapshot(path: str | Path) -> HostSnapshot:
    """Read and validate a snapshot JSON file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise HostSnapshotError(f"cannot read snapshot {path}: {e}") from e
    return parse_snapshot(text)
