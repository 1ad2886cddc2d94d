"""
Root test configuration and fixtures for the reception pass project.

Every test talks to a FakeNexudus instead of the real API; nothing here
opens a network connection.
"""

from __future__ import annotations

import pytest

from reception.pass_engine.core.clock import FixedClock
from reception.pass_engine.core.config import EngineConfig
from tests.fixtures.fake_nexudus import FakeNexudus
from tests.fixtures.records import TODAY, at


@pytest.fixture
def fake_nexudus() -> FakeNexudus:
    """Fresh in-memory upstream for each test."""
    return FakeNexudus()


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def clock_at():
    """Factory: clock_at("10:30") -> FixedClock on TODAY."""

    def _make(hhmm: str, day: str = TODAY) -> FixedClock:
        return FixedClock(at(hhmm, day))

    return _make
