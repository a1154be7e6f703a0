"""FastMCP server exposing the range queries as tools."""

from __future__ import annotations

import json
import logging

from mcp.server.fastmcp import FastMCP

from spell_range.server.config import ServerConfig
from spell_range.server.dependencies import RangeRuntime, build_runtime

logger = logging.getLogger(__name__)

_RESULT_TEXT = {1: "in range", 0: "out of range", None: "unknown"}
_HAS_RANGE_TEXT = {1: "has a range", 0: "has no range", None: "unknown"}


def create_mcp_server(config: ServerConfig, runtime: RangeRuntime | None = None) -> FastMCP:
    """Create a FastMCP server with the spell-range tools."""

    mcp = FastMCP(
        "spell-range",
        instructions="Check whether spells are in range of a unit, by spell ID or name",
    )

    _runtime = runtime or build_runtime(config)
    spell_range = _runtime.spell_range

    # No frame loop here: each tool call drives the tick, which is a no-op
    # unless the tick interval has passed.

    @mcp.tool()
    async def spell_in_range(spell: str, unit: str = "target") -> str:
        """Check whether a spell (ID or name) is in range of a unit.

        Units are host unit references such as target, focus, mouseover or party1.
        """
        spell_range.tick()
        result = spell_range.is_spell_in_range(spell, unit)
        return f"{spell} on {unit}: {_RESULT_TEXT[result]}"

    @mcp.tool()
    async def spell_has_range(spell: str) -> str:
        """Check whether a spell (ID or name) has a range at all."""
        spell_range.tick()
        result = spell_range.spell_has_range(spell)
        return f"{spell}: {_HAS_RANGE_TEXT[result]}"

    @mcp.tool()
    async def range_status() -> str:
        """Cache, index and resolver statistics."""
        return json.dumps(spell_range.stats(), indent=2, sort_keys=True)

    logger.info("MCP server created (session=%s)", spell_range.session_id)
    return mcp
