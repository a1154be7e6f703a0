"""Request logging tagged with the range session."""

from __future__ import annotations

import logging
import re
import time
from urllib.parse import unquote

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger(__name__)

_QUERY_PATH = re.compile(r"/(range|has-range)/([^/]+)$")


class RangeRequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with the session id of the runtime that served it.

    Range queries arrive many times a second from a host, so they are logged
    at DEBUG with the spell and unit; other requests log at INFO.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        elapsed = (time.monotonic() - start) * 1000

        runtime = getattr(request.app.state, "runtime", None)
        session = runtime.spell_range.session_id if runtime is not None else "-"

        match = _QUERY_PATH.search(request.url.path)
        if match is not None and request.method == "GET":
            kind, spell = match.group(1), unquote(match.group(2))
            unit = request.query_params.get("unit", "target") if kind == "range" else "-"
            logger.debug(
                "[%s] %s %r unit=%s -> %d (%.1fms)",
                session,
                kind,
                spell,
                unit,
                response.status_code,
                elapsed,
            )
        else:
            logger.info(
                "[%s] %s %s -> %d (%.1fms)",
                session,
                request.method,
                request.url.path,
                response.status_code,
                elapsed,
            )
        return response
