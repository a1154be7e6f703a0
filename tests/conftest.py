"""Pytest fixtures for spell-range tests.

Provides fixtures for:
- Fake clock for cache expiry and tick spacing
- Call-recording fake oracles (with and without direct queries)
- RangeState / SpellRange instances wired to them
"""

from __future__ import annotations

import pytest

from spell_range.core.config import RangeConfig
from spell_range.library import SpellRange
from spell_range.state import RangeState
from spell_range.temporal.clock import FakeClock

from tests.fake_host import FakeDirectOracle, FakeOracle


# ============================================================================
# Core fixtures
# ============================================================================


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a fake clock for testing."""
    return FakeClock(1000.0)


@pytest.fixture
def config() -> RangeConfig:
    return RangeConfig()


@pytest.fixture
def oracle() -> FakeOracle:
    """Host without direct range queries."""
    return FakeOracle()


@pytest.fixture
def direct_oracle() -> FakeDirectOracle:
    """Host with direct range queries."""
    return FakeDirectOracle()


@pytest.fixture
def state(oracle: FakeOracle, fake_clock: FakeClock, config: RangeConfig) -> RangeState:
    return RangeState.create(oracle, config=config, clock=fake_clock, session_id="test")


# ============================================================================
# Library fixtures
# ============================================================================


@pytest.fixture
def fireball_oracle(direct_oracle: FakeDirectOracle) -> FakeDirectOracle:
    """Player knows Fireball (133) in slot 5; direct queries know nothing."""
    direct_oracle.add_spell(5, "Fireball", 133, in_range={"target": True}, has_range=True)
    return direct_oracle


@pytest.fixture
def spell_range(fireball_oracle: FakeDirectOracle, fake_clock: FakeClock) -> SpellRange:
    """SpellRange over fireball_oracle with its initial indexes built."""
    lib = SpellRange(fireball_oracle, clock=fake_clock, session_id="test")
    lib.tick()
    fireball_oracle.reset_calls()
    return lib
