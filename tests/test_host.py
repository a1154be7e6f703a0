"""Tests for the snapshot-backed host, its event bus and the SpellRange facade."""

from __future__ import annotations

import json

import pytest

from spell_range import SpellRange
from spell_range.core.exceptions import HostSnapshotError
from spell_range.core.protocols import DirectRangeOracle, SpellbookOracle
from spell_range.core.types import CatalogKind, EventKind, HostEvent, ItemType
from spell_range.host import (
    DirectQuerySnapshotHost,
    EventBus,
    SnapshotHost,
    host_from_snapshot,
    load_snapshot,
    parse_snapshot,
)


SNAPSHOT = {
    "direct_queries": True,
    "spellbook": [
        {
            "slot": 1,
            "name": "Fireball",
            "spell_id": 133,
            "has_range": True,
            "in_range": {"target": True, "focus": False},
        },
        {
            "slot": 2,
            "name": "Final Verdict",
            "spell_id": 383328,
            "base_id": 85256,
            "has_range": True,
            "in_range": {"target": False},
        },
        {"slot": 3, "type": "FLYOUT", "name": "Portals"},
        {"slot": 4, "name": "Blink", "link": "|cff71d5ff|Hspell:1953:0|h[Blink]|h|r", "has_range": False},
    ],
    "pet_spellbook": [{"slot": 2, "type": "PETACTION", "name": "Growl", "spell_id": 2649}],
    "pet_exists": True,
    "pet_actions": [{"slot": 4, "name": "Growl", "spell_id": 2649, "checks_range": True, "in_range": True}],
    "units": {"target": "Creature-0-1", "mouseover": "Creature-0-1"},
    "spell_names": {"143": "Fireball", "85256": "Templar's Verdict"},
}


@pytest.fixture
def snapshot():
    return parse_snapshot(SNAPSHOT)


# =====================================================================
# Snapshot parsing
# =====================================================================


class TestSnapshot:
    def test_parse_dict(self, snapshot):
        assert len(snapshot.spellbook) == 4
        assert snapshot.spellbook[2].type is ItemType.FLYOUT
        assert snapshot.spell_names[143] == "Fireball"

    def test_parse_json_text(self):
        snapshot = parse_snapshot(json.dumps(SNAPSHOT))
        assert snapshot.pet_actions[0].checks_range is True

    def test_defaults(self):
        snapshot = parse_snapshot({})
        assert snapshot.direct_queries is True
        assert snapshot.pet_exists is False
        assert snapshot.spellbook == []

    def test_invalid_slot(self):
        with pytest.raises(HostSnapshotError):
            parse_snapshot({"spellbook": [{"slot": 0, "name": "Fireball"}]})

    def test_invalid_json(self):
        with pytest.raises(HostSnapshotError):
            parse_snapshot("{not json")

    def test_duplicate_slots(self):
        data = {"spellbook": [{"slot": 1, "name": "A"}, {"slot": 1, "name": "B"}]}
        with pytest.raises(HostSnapshotError) as exc_info:
            parse_snapshot(data)
        assert exc_info.value.field == "spellbook"
        assert "spellbook" in str(exc_info.value)

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
        host = load_snapshot(path)
        assert isinstance(host, DirectQuerySnapshotHost)

    def test_missing_file(self, tmp_path):
        with pytest.raises(HostSnapshotError):
            load_snapshot(tmp_path / "missing.json")


# =====================================================================
# Host oracles
# =====================================================================


class TestSnapshotHost:
    def test_host_flavor_follows_snapshot(self, snapshot):
        assert isinstance(host_from_snapshot(snapshot), DirectRangeOracle)
        legacy = host_from_snapshot(snapshot.model_copy(update={"direct_queries": False}))
        assert not isinstance(legacy, DirectRangeOracle)
        assert isinstance(legacy, SpellbookOracle)

    def test_slot_queries(self, snapshot):
        host = SnapshotHost(snapshot)
        assert host.slot_info(1, CatalogKind.PRIMARY).spell_id == 133
        assert host.slot_range_query(1, CatalogKind.PRIMARY, "target") is True
        assert host.slot_range_query(1, CatalogKind.PRIMARY, "focus") is False
        assert host.slot_range_query(1, CatalogKind.PRIMARY, "party1") is None
        assert host.slot_range_query(9, CatalogKind.PRIMARY, "target") is None

    def test_equivalent_unit_shares_answer(self, snapshot):
        host = SnapshotHost(snapshot)
        assert host.units_equal("mouseover", "target")
        assert host.slot_range_query(1, CatalogKind.PRIMARY, "mouseover") is True

    def test_resolve_name_from_id(self, snapshot):
        host = SnapshotHost(snapshot)
        assert host.resolve_name_from_id(133) == "Fireball"
        assert host.resolve_name_from_id(85256) == "Templar's Verdict"
        assert host.resolve_name_from_id(1) is None

    def test_spell_link(self, snapshot):
        host = SnapshotHost(snapshot)
        assert host.spell_link("blink") == "|cff71d5ff|Hspell:1953:0|h[Blink]|h|r"
        assert "spell:133:" in host.spell_link("Fireball")
        assert host.spell_link("Pyroblast") is None

    def test_name_query_only_knows_player_spells(self, snapshot):
        host = SnapshotHost(snapshot)
        assert host.name_range_query("fireball", "target") is True
        assert host.name_range_query("Growl", "target") is None

    def test_direct_query_by_base_id(self, snapshot):
        host = DirectQuerySnapshotHost(snapshot)
        assert host.direct_range_query(85256, "target") is False
        assert host.direct_range_query("133", "target") is True
        assert host.direct_has_range_query("Fireball") is True

    def test_direct_query_by_float_id(self, snapshot):
        host = DirectQuerySnapshotHost(snapshot)
        assert host.direct_range_query(133.0, "target") is True
        assert host.direct_has_range_query(133.0) is True
        assert host.direct_range_query(1.5, "target") is None
        assert host.direct_range_query(True, "target") is None
        assert host.direct_range_query("\u0661\u0663\u0663", "target") is None

    def test_direct_query_skips_pet_spells_by_default(self, snapshot):
        host = DirectQuerySnapshotHost(snapshot)
        assert host.direct_range_query(2649, "target") is None
        host.load(snapshot.model_copy(update={"pet_direct_queries": True}))
        assert host.direct_has_range_query(2649) is None  # has_range unset in snapshot
        assert host.direct_range_query("growl", "focus") is None

    def test_companion_actions(self, snapshot):
        host = SnapshotHost(snapshot)
        assert host.companion_exists()
        info = host.companion_action_info(4)
        assert info.name == "Growl"
        assert info.in_range is True
        assert host.companion_action_info(1) is None


# =====================================================================
# EventBus
# =====================================================================


class TestEventBus:
    def test_publish_reaches_subscribers(self):
        bus = EventBus()
        seen = []
        bus.subscribe(EventKind.CATALOG_CHANGED, seen.append)
        assert bus.emit(EventKind.CATALOG_CHANGED) == 1
        assert bus.emit(EventKind.TARGET_CHANGED) == 0
        assert seen == [HostEvent(EventKind.CATALOG_CHANGED)]

    def test_emit_passes_argument(self):
        bus = EventBus()
        seen = []
        bus.subscribe(EventKind.SETTING_CHANGED, seen.append)
        bus.emit(EventKind.SETTING_CHANGED, "ShowAllSpellRanks")
        assert seen[0].arg == "ShowAllSpellRanks"


# =====================================================================
# SpellRange over a snapshot host
# =====================================================================


class TestSpellRangeOverSnapshot:
    @pytest.fixture
    def bus(self):
        return EventBus()

    @pytest.fixture
    def lib(self, snapshot, bus, fake_clock):
        lib = SpellRange(host_from_snapshot(snapshot), events=bus, clock=fake_clock)
        lib.tick()
        return lib

    def test_startup_builds_everything(self, lib):
        assert lib.scheduler.tick_count == 1
        assert lib.state.catalog.lookup(CatalogKind.PRIMARY, 133) == 1
        assert lib.state.catalog.lookup(CatalogKind.COMPANION, 2649) == 2
        assert lib.state.actions.lookup(2649) == 4

    def test_queries(self, lib):
        assert lib.uses_direct_queries
        assert lib.is_spell_in_range("Fireball", "target") == 1
        assert lib.is_spell_in_range(85256, "target") == 0
        assert lib.is_spell_in_range(143, "target") == 1
        assert lib.is_spell_in_range(2649, "target") == 1
        assert lib.spell_has_range("Blink") == 0
        assert lib.spell_has_range(2649) == 1

    def test_float_identifiers(self, lib):
        assert lib.is_spell_in_range(133.0, "target") == 1
        assert lib.spell_has_range(133.0) == 1
        assert lib.is_spell_in_range(133.5, "target") is None
        assert lib.spell_has_range(133.5) is None

    def test_link_recovered_id_is_indexed(self, lib):
        assert lib.state.catalog.lookup(CatalogKind.PRIMARY, 1953) == 4

    def test_legacy_host(self, snapshot, fake_clock):
        legacy = host_from_snapshot(snapshot.model_copy(update={"direct_queries": False}))
        lib = SpellRange(legacy, clock=fake_clock)
        lib.tick()
        assert not lib.uses_direct_queries
        assert lib.is_spell_in_range(133, "target") == 1
        assert lib.is_spell_in_range("Growl", "target") == 1

    def test_bus_events_reach_scheduler(self, lib, bus):
        bus.emit(EventKind.CATALOG_CHANGED)
        assert lib.scheduler.pending
        bus.emit(EventKind.SETTING_CHANGED, "ShowAllSpellRanks")
        lib.tick(force=True)
        assert not lib.scheduler.pending

    def test_handle_event(self, lib):
        lib.handle_event(HostEvent(EventKind.TARGET_CHANGED))
        assert lib.tick(force=True).rebuilt_names == ["COMPANION_ACTIONS"]

    def test_stats(self, lib):
        lib.is_spell_in_range(133, "target")
        stats = lib.stats()
        assert stats["session_id"] == lib.session_id
        assert stats["cache"]["size"] == 1
        assert stats["actions_indexed"] == 2
        assert stats["scheduler"]["ticks"] == 1
