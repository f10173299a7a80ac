"""Shared test fixtures and data loading for setpoint-schedule.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference instant: Mon 2025-01-06 08:07:30 (naive local time).
Default window: 15-minute buckets over 180 minutes, 08:00 through 10:45.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")


# ---------------------------------------------------------------------------
# Reference constants derived from reference.json
# ---------------------------------------------------------------------------
NOW = datetime.fromisoformat(_reference["now"])
FLOOR = datetime.fromisoformat(_reference["floor"])
GRANULARITY = _reference["granularity_minutes"]
LOOKAHEAD = _reference["lookahead_minutes"]
BUCKET_COUNT = _reference["bucket_count"]
LAST_BUCKET = datetime.fromisoformat(_reference["last_bucket"])


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def at(time_label: str, day: str = "2025-01-06") -> datetime:
    """Datetime on the reference day from an 'HH:MM' label.

    >>> at("08:30")
    datetime(2025, 1, 6, 8, 30)
    """
    return datetime.fromisoformat(f"{day}T{time_label}:00")


def iso(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value is not None else None


def make_event(
    label: str,
    start: str,
    end: str,
    created: str = "2025-01-01T00:00:00",
):
    """RawEvent with precise endpoints on the reference day ('HH:MM' labels)."""
    from setpoint_schedule.types import RawEvent

    return RawEvent(
        label=label,
        created_at=datetime.fromisoformat(created),
        start=at(start),
        end=at(end),
    )


def make_schedule(pairs, granularity: int = GRANULARITY):
    """Schedule from [(iso or datetime, value), ...]."""
    from setpoint_schedule.resolution import BucketResolution
    from setpoint_schedule.schedule import Schedule

    targets = [
        (datetime.fromisoformat(b) if isinstance(b, str) else b, v)
        for b, v in pairs
    ]
    return Schedule(BucketResolution(granularity), targets)


def default_window_schedule(value: int = 20):
    """Every bucket of the reference window mapped to value."""
    return make_schedule(
        [(FLOOR + timedelta(minutes=GRANULARITY * k), value) for k in range(BUCKET_COUNT)]
    )


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def quarter_hour():
    from setpoint_schedule.resolution import BucketResolution

    return BucketResolution(GRANULARITY)


@pytest.fixture
def events_path() -> Path:
    """Calendar-API style response with an all-day, a timed and a text event."""
    return FIXTURES_DIR / "events.json"


@pytest.fixture
def invalid_events_path() -> Path:
    return FIXTURES_DIR / "invalid_events.json"
