"""In-memory host implementation driven by JSON snapshots."""

from pathlib import Path

from spell_range.host.memory import (
    DirectQuerySnapshotHost,
    EventBus,
    SnapshotHost,
    host_from_snapshot,
)
from spell_range.host.snapshot import (
    HostSnapshot,
    PetAction,
    SpellbookEntry,
    parse_snapshot,
    read_snapshot,
)


def load_snapshot(path: str | Path) -> SnapshotHost:
    """Read a snapshot file and build a host for it."""
    return host_from_snapshot(read_snapshot(path))


__all__ = [
    "DirectQuerySnapshotHost",
    "EventBus",
    "HostSnapshot",
    "PetAction",
    "SnapshotHost",
    "SpellbookEntry",
    "host_from_snapshot",
    "load_snapshot",
    "parse_snapshot",
    "read_snapshot",
]
