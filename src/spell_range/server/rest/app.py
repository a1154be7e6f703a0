"""FastAPI application factory."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spell_range import __version__
from spell_range.server.config import ServerConfig
from spell_range.server.dependencies import RangeRuntime, build_runtime
from spell_range.server.errors import EXCEPTION_HANDLERS
from spell_range.server.rest.middleware import RangeRequestLoggingMiddleware
from spell_range.server.rest.routers import health, host, queries

logger = logging.getLogger(__name__)


def create_app(config: ServerConfig, runtime: RangeRuntime | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``runtime`` may be supplied to share a prebuilt host (tests, embedding);
    otherwise one is built from the config at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Startup
        app.state.config = config
        app.state.start_time = time.monotonic()
        app.state.runtime = runtime or build_runtime(config)
        spell_range = app.state.runtime.spell_range

        # Build the initial indexes before serving queries
        spell_range.tick(force=True)

        if config.tick_worker:
            from spell_range.server.workers import TickWorker

            worker = TickWorker(spell_range, config.range.tick_interval)
            app.state.worker = worker
            await worker.start()

        logger.info(
            "spell-range server started (session=%s, direct_queries=%s)",
            spell_range.session_id,
            spell_range.uses_direct_queries,
        )
        yield

        # Shutdown
        if getattr(app.state, "worker", None) is not None:
            await app.state.worker.stop()
            logger.info("Tick worker stopped")
        logger.info("spell-range server stopped")

    app = FastAPI(
        title="spell-range",
        description="Spell range checks by spell ID or name",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging
    app.add_middleware(RangeRequestLoggingMiddleware)

    # Exception handlers
    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    # Routers
    prefix = "/api/v1"
    app.include_router(health.router, prefix=prefix, tags=["health"])
    app.include_router(queries.router, prefix=prefix, tags=["queries"])
    app.include_router(host.router, prefix=prefix, tags=["host"])

    return app
