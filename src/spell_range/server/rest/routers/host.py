"""Host-side endpoints: events, snapshots and manual ticks."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from spell_range.core.types import EventKind, HostEvent
from spell_range.host.snapshot import parse_snapshot
from spell_range.server.dependencies import RangeRuntime, get_runtime
from spell_range.server.schemas import (
    EventRequest,
    EventResponse,
    SnapshotResponse,
    TickResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _pending(runtime: RangeRuntime) -> list[str]:
    return runtime.spell_range.scheduler.stats()["pending"]


@router.post("/events")
async def post_event(
    body: EventRequest,
    runtime: RangeRuntime = Depends(get_runtime),
) -> EventResponse:
    delivered = runtime.bus.publish(HostEvent(kind=body.kind, arg=body.arg))
    return EventResponse(kind=body.kind, delivered=delivered, pending=_pending(runtime))


@router.put("/host/snapshot")
async def put_snapshot(
    body: dict[str, Any] = Body(...),
    runtime: RangeRuntime = Depends(get_runtime),
) -> SnapshotResponse:
    snapshot = parse_snapshot(body)
    if snapshot.direct_queries != runtime.spell_range.uses_direct_queries:
        logger.warning(
            "Snapshot direct_queries=%s ignored; host capabilities are fixed at startup",
            snapshot.direct_queries,
        )
    runtime.host.load(snapshot)
    # Whatever the host shows now, the indexes must be rebuilt
    runtime.bus.emit(EventKind.CATALOG_CHANGED)
    runtime.bus.emit(EventKind.COMPANION_BAR_CHANGED)
    return SnapshotResponse(
        spells=len(snapshot.spellbook),
        pet_spells=len(snapshot.pet_spellbook),
        pet_actions=len(snapshot.pet_actions),
        pending=_pending(runtime),
    )


@router.post("/tick")
async def post_tick(runtime: RangeRuntime = Depends(get_runtime)) -> TickResponse:
    report = runtime.spell_range.tick(force=True)
    if report is None:
        return TickResponse(ran=False)
    return TickResponse(ran=True, rebuilt=report.rebuilt_names, swept=report.swept)
