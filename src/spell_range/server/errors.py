"""Error types and exception-to-HTTP mapping for the server."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from spell_range.core.exceptions import HostSnapshotError


class RuntimeNotReadyError(Exception):
    """The range runtime has not been initialized."""


async def host_snapshot_error_handler(request: Request, exc: HostSnapshotError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": "invalid_snapshot", "detail": str(exc), "field": exc.field},
    )


async def runtime_not_ready_handler(request: Request, exc: RuntimeNotReadyError) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"error": "service_unavailable", "detail": str(exc)},
    )


EXCEPTION_HANDLERS = {
    HostSnapshotError: host_snapshot_error_handler,
    RuntimeNotReadyError: runtime_not_ready_handler,
}
