"""Tests for the REST and MCP servers.

Exercises the full stack in-process: REST API → SpellRange → snapshot host.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from spell_range import SpellRange
from spell_range.core.config import RangeConfig
from spell_range.core.types import EventKind
from spell_range.server.__main__ import build_config, parse_args
from spell_range.server.config import ServerConfig
from spell_range.server.dependencies import build_runtime
from spell_range.server.mcp.server import create_mcp_server
from spell_range.server.rest.app import create_app
from spell_range.scheduler.invalidation import RebuildFlag
from spell_range.server.workers import TickWorker
from spell_range.temporal.clock import FakeClock

from tests.fake_host import FlakyOracle

pytestmark = pytest.mark.e2e

SNAPSHOT = {
    "spellbook": [
        {
            "slot": 1,
            "name": "Fireball",
            "spell_id": 133,
            "has_range": True,
            "in_range": {"target": True},
        },
        {"slot": 2, "name": "Arcane Intellect", "spell_id": 1459, "has_range": False},
    ],
    "pet_spellbook": [{"slot": 2, "type": "PETACTION", "name": "Growl", "spell_id": 2649}],
    "pet_exists": True,
    "pet_actions": [
        {"slot": 4, "name": "Growl", "spell_id": 2649, "checks_range": True, "in_range": False}
    ],
}


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path


@pytest.fixture
def server_config(snapshot_path: Path) -> ServerConfig:
    return ServerConfig(
        mode="rest",
        snapshot_path=snapshot_path,
        tick_worker=False,  # tests drive ticks explicitly
    )


@pytest.fixture
def runtime(server_config: ServerConfig):
    return build_runtime(server_config, clock=FakeClock(50.0))


@pytest.fixture
async def client(server_config: ServerConfig, runtime):
    app = create_app(server_config, runtime=runtime)

    # Run lifespan manually (ASGITransport doesn't trigger it)
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


# ============================================================================
# Health
# ============================================================================


class TestHealth:
    async def test_health(self, client: AsyncClient):
        resp = await client.get("/api/v1/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert "version" in data

    async def test_status(self, client: AsyncClient, runtime):
        resp = await client.get("/api/v1/status")
        assert resp.status_code == 200
        data = resp.json()
        assert data["session_id"] == runtime.spell_range.session_id
        assert data["direct_queries"] is True
        assert data["tick_worker_running"] is False
        # Lifespan forces the initial tick
        assert data["scheduler"]["ticks"] == 1
        assert data["scheduler"]["pending"] == []


# ============================================================================
# Queries
# ============================================================================


class TestQueries:
    async def test_in_range_by_name(self, client: AsyncClient):
        resp = await client.get("/api/v1/range/Fireball")
        assert resp.status_code == 200
        data = resp.json()
        assert data == {"spell": "Fireball", "unit": "target", "result": 1, "state": "IN_RANGE"}

    async def test_in_range_by_id(self, client: AsyncClient):
        resp = await client.get("/api/v1/range/133", params={"unit": "target"})
        assert resp.json()["result"] == 1

    async def test_companion_spell_on_target(self, client: AsyncClient):
        resp = await client.get("/api/v1/range/2649")
        data = resp.json()
        assert data["result"] == 0
        assert data["state"] == "OUT_OF_RANGE"

    async def test_unknown_spell_is_null(self, client: AsyncClient):
        resp = await client.get("/api/v1/range/99999")
        data = resp.json()
        assert data["result"] is None
        assert data["state"] == "INDETERMINATE"

    async def test_has_range(self, client: AsyncClient):
        assert (await client.get("/api/v1/has-range/Fireball")).json()["result"] == 1
        assert (await client.get("/api/v1/has-range/1459")).json()["result"] == 0
        assert (await client.get("/api/v1/has-range/Growl")).json()["result"] == 1

    async def test_range_queries_logged_with_session(self, client: AsyncClient, runtime, caplog):
        caplog.set_level(logging.DEBUG, logger="spell_range.server.rest.middleware")
        await client.get("/api/v1/range/Fireball", params={"unit": "focus"})
        await client.get("/api/v1/health")

        session = runtime.spell_range.session_id
        messages = [r.getMessage() for r in caplog.records if r.name.endswith("middleware")]
        assert f"[{session}] range 'Fireball' unit=focus -> 200" in messages[0]
        assert messages[1].startswith(f"[{session}] GET /api/v1/health -> 200")

    async def test_results_are_cached(self, client: AsyncClient):
        await client.get("/api/v1/range/Fireball")
        await client.get("/api/v1/range/Fireball")
        data = (await client.get("/api/v1/status")).json()
        assert data["cache"]["hits"] == 1
        assert data["cache"]["size"] == 1


# ============================================================================
# Host events and snapshots
# ============================================================================


class TestHost:
    async def test_post_event_raises_flags(self, client: AsyncClient):
        resp = await client.post("/api/v1/events", json={"kind": "SPELLS_CHANGED"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["kind"] == EventKind.CATALOG_CHANGED.value
        assert data["delivered"] == 1
        assert data["pending"] == ["PRIMARY_CATALOG", "COMPANION_CATALOG"]

    async def test_setting_event_filters_on_name(self, client: AsyncClient):
        resp = await client.post(
            "/api/v1/events", json={"kind": "CVAR_UPDATE", "arg": "autoLootDefault"}
        )
        assert resp.json()["pending"] == []

    async def test_unknown_event_kind_rejected(self, client: AsyncClient):
        resp = await client.post("/api/v1/events", json={"kind": "BAG_UPDATE"})
        assert resp.status_code == 422

    async def test_tick_applies_pending_rebuilds(self, client: AsyncClient):
        await client.post("/api/v1/events", json={"kind": "PET_BAR_UPDATE"})
        resp = await client.post("/api/v1/tick")
        data = resp.json()
        assert data["ran"] is True
        assert data["rebuilt"] == ["COMPANION_ACTIONS"]

    async def test_snapshot_replaces_spellbook(self, client: AsyncClient):
        new_snapshot = {
            "spellbook": [
                {"slot": 1, "name": "Frostbolt", "spell_id": 116, "in_range": {"target": False}}
            ],
        }
        resp = await client.put("/api/v1/host/snapshot", json=new_snapshot)
        assert resp.status_code == 200
        data = resp.json()
        assert data["spells"] == 1
        assert data["pending"] == ["PRIMARY_CATALOG", "COMPANION_CATALOG", "COMPANION_ACTIONS"]

        await client.post("/api/v1/tick")
        assert (await client.get("/api/v1/range/Frostbolt")).json()["result"] == 0
        assert (await client.get("/api/v1/range/Fireball")).json()["result"] is None

    async def test_invalid_snapshot(self, client: AsyncClient):
        bad = {"spellbook": [{"slot": 1, "name": "A"}, {"slot": 1, "name": "B"}]}
        resp = await client.put("/api/v1/host/snapshot", json=bad)
        assert resp.status_code == 422
        data = resp.json()
        assert data["error"] == "invalid_snapshot"
        assert data["field"] == "spellbook"


# ============================================================================
# Worker, MCP and CLI
# ============================================================================


class TestTickWorker:
    def test_run_once_counts_ticks(self, runtime):
        worker = TickWorker(runtime.spell_range, interval=0.2)
        worker.run_once()
        # Same instant: the tick interval has not passed
        worker.run_once()
        assert worker.tick_count == 1

    async def test_start_stop(self, runtime):
        worker = TickWorker(runtime.spell_range, interval=0.01)
        await worker.start()
        assert worker.running
        await worker.stop()
        assert not worker.running
        assert worker.error_count == 0

    async def test_survives_tick_errors(self, caplog):
        oracle = FlakyOracle(failures=1)
        oracle.add_spell(5, "Fireball", 133, in_range={"target": True})
        spell_range = SpellRange(oracle, config=RangeConfig(tick_interval=0.01))
        worker = TickWorker(spell_range, interval=0.01)

        await worker.start()
        try:
            for _ in range(200):
                if worker.tick_count:
                    break
                await asyncio.sleep(0.01)
            assert worker.running
        finally:
            await worker.stop()

        assert worker.error_count == 1
        assert worker.tick_count >= 1
        assert "Error in tick" in caplog.text
        # The failed rebuild was retried on a later tick
        assert spell_range.scheduler.pending == RebuildFlag.NONE
        assert spell_range.is_spell_in_range(133, "target") == 1


class TestMCPServer:
    async def test_tools_registered(self, server_config: ServerConfig, runtime):
        mcp = create_mcp_server(server_config, runtime=runtime)
        tools = await mcp.list_tools()
        names = {tool.name for tool in tools}
        assert names == {"spell_in_range", "spell_has_range", "range_status"}


class TestCLI:
    def test_defaults(self):
        config = build_config(parse_args([]))
        assert config.mode == "rest"
        assert config.port == 8421
        assert config.range == RangeConfig()

    def test_overrides(self, snapshot_path: Path):
        args = parse_args(
            [
                "--mode", "mcp",
                "--snapshot", str(snapshot_path),
                "--no-direct-queries",
                "--cache-ttl", "0.5",
                "--sweep-budget", "10",
                "--no-tick-worker",
            ]
        )
        config = build_config(args)
        assert config.mode == "mcp"
        assert config.snapshot_path == snapshot_path
        assert config.direct_queries is False
        assert config.range.cache_ttl == 0.5
        assert config.range.sweep_budget == 10
        assert config.tick_worker is False

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            ServerConfig(mode="grpc")
