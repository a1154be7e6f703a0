"""Range query endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from spell_range.server.dependencies import RangeRuntime, get_runtime
from spell_range.server.schemas import RangeResponse

router = APIRouter()


@router.get("/range/{spell}")
async def spell_in_range(
    spell: str,
    unit: str = Query(default="target"),
    runtime: RangeRuntime = Depends(get_runtime),
) -> RangeResponse:
    result = runtime.spell_range.check_range(spell, unit)
    return RangeResponse(spell=spell, unit=unit, result=result.as_int(), state=result.name)


@router.get("/has-range/{spell}")
async def spell_has_range(
    spell: str,
    runtime: RangeRuntime = Depends(get_runtime),
) -> RangeResponse:
    result = runtime.spell_range.check_has_range(spell)
    return RangeResponse(spell=spell, result=result.as_int(), state=result.name)
