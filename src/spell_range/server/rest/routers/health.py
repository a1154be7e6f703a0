"""Health and status endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, Request

from spell_range import __version__
from spell_range.server.dependencies import RangeRuntime, get_runtime
from spell_range.server.schemas import HealthResponse, StatusResponse

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> HealthResponse:
    elapsed = time.monotonic() - request.app.state.start_time
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(elapsed, 1),
    )


@router.get("/status")
async def status(
    request: Request,
    runtime: RangeRuntime = Depends(get_runtime),
) -> StatusResponse:
    elapsed = time.monotonic() - request.app.state.start_time
    stats = runtime.spell_range.stats()
    worker = getattr(request.app.state, "worker", None)

    return StatusResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(elapsed, 1),
        session_id=stats["session_id"],
        direct_queries=runtime.spell_range.uses_direct_queries,
        tick_worker_running=bool(worker and worker.running),
        cache=stats["cache"],
        scheduler=stats["scheduler"],
        resolver=stats["resolver"],
    )
