"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from spell_range.core.types import EventKind


# ========== Common ==========

class ErrorResponse(BaseModel):
    error: str
    detail: str


# ========== Health ==========

class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class StatusResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float
    session_id: str
    direct_queries: bool
    tick_worker_running: bool
    cache: dict[str, Any]
    scheduler: dict[str, Any]
    resolver: dict[str, Any]


# ========== Queries ==========

class RangeResponse(BaseModel):
    """Result of a range query. ``result`` is 1, 0 or null."""

    spell: str
    unit: str | None = None
    result: int | None
    state: str = Field(description="IN_RANGE | OUT_OF_RANGE | INDETERMINATE")


# ========== Host ==========

class EventRequest(BaseModel):
    kind: EventKind
    arg: str | None = Field(default=None, description="Setting name for CVAR_UPDATE")


class EventResponse(BaseModel):
    kind: EventKind
    delivered: int
    pending: list[str]


class SnapshotResponse(BaseModel):
    spells: int
    pet_spells: int
    pet_actions: int
    pending: list[str]


class TickResponse(BaseModel):
    ran: bool
    rebuilt: list[str] = Field(default_factory=list)
    swept: int = 0
