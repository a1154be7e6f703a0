"""Dependency injection: the shared range runtime."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request

from spell_range.host import EventBus, SnapshotHost, host_from_snapshot, read_snapshot
from spell_range.host.snapshot import HostSnapshot
from spell_range.library import SpellRange
from spell_range.server.config import ServerConfig
from spell_range.server.errors import RuntimeNotReadyError
from spell_range.temporal.clock import Clock

logger = logging.getLogger(__name__)


@dataclass
class RangeRuntime:
    """The host, its event bus and the SpellRange bound to them."""

    host: SnapshotHost
    bus: EventBus
    spell_range: SpellRange


def build_runtime(config: ServerConfig, clock: Clock | None = None) -> RangeRuntime:
    """Create the in-memory host and wire a SpellRange to it."""
    if config.snapshot_path is not None:
        snapshot = read_snapshot(config.snapshot_path)
        logger.info("Read host snapshot from %s", config.snapshot_path)
    else:
        snapshot = HostSnapshot(direct_queries=config.direct_queries)
    host = host_from_snapshot(snapshot)
    bus = EventBus()
    spell_range = SpellRange(host, events=bus, config=config.range, clock=clock)
    return RangeRuntime(host=host, bus=bus, spell_range=spell_range)


def get_runtime(request: Request) -> RangeRuntime:
    """Get the RangeRuntime from app state."""
    runtime: RangeRuntime | None = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise RuntimeNotReadyError("Range runtime not initialized")
    return runtime
