"""
Shared pytest configuration for team roster tests.

Stores are built with zero latency and a fixed clock so tests are fast and
the sample schedule's relative dates are deterministic.
"""

from datetime import datetime

import pytest
import pytz

from team_roster.database.init_defaults import build_initial_data, empty_league_data
from team_roster.services.league_store import LeagueStore

# Mid-April: spring season
FIXED_NOW = datetime(2024, 4, 15, 12, 0, tzinfo=pytz.UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def sample_data():
    """Sample roster and schedule relative to FIXED_NOW."""
    return build_initial_data(FIXED_NOW)


@pytest.fixture
def store(sample_data):
    """Store seeded with the sample data, no latency."""
    return LeagueStore(initial_data=sample_data, latency_seconds=0, clock=fixed_clock)


@pytest.fixture
def empty_store():
    """Store with an empty roster and schedule, no latency."""
    return LeagueStore(
        initial_data=empty_league_data(FIXED_NOW), latency_seconds=0, clock=fixed_clock
    )


@pytest.fixture
def now():
    """The fixed 'current' time the sample data is built around."""
    return FIXED_NOW
