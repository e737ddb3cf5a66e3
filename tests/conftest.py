"""Shared test fixtures and data loading for track-dispatch.

All test data lives in data/fixtures/ as JSON and text files.  This module
loads that data and exposes helper functions + pytest fixtures for the tests.

Scenario conventions:
    - times are "HH:MM" strings
    - durations are whole minutes; null marks an open-ended activity
    - "min" / "max" stand for time.min / time.max
"""

from __future__ import annotations

import json
from datetime import time, timedelta
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


def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def t(label: str) -> time:
    """Time from a scenario label.

    >>> t("09:30")
    datetime.time(9, 30)
    >>> t("max")
    datetime.time(23, 59, 59, 999999)
    """
    if label == "min":
        return time.min
    if label == "max":
        return time.max
    return time.fromisoformat(label)


def minutes(n: int) -> timedelta:
    return timedelta(minutes=n)


def make_activity(title: str, duration: int | None):
    """Activity of `duration` minutes, or open-ended when duration is None."""
    from track_dispatch.types import Activity

    if duration is None:
        return Activity.open_end(title)
    return Activity.minutes(title, duration)


def make_activities(durations: list[int | None]):
    """Activities titled A0, A1, ... with the given durations."""
    return [make_activity(f"A{i}", d) for i, d in enumerate(durations)]


def make_timetable(entries: list[list]):
    """Build a Timetable from [["09:00", 60], ["17:00", null], ...]."""
    from track_dispatch.timetable import Timetable

    timetable = Timetable()
    for i, (start, duration) in enumerate(entries):
        timetable.put(t(start), make_activity(f"E{i}", duration))
    return timetable


def talk_list():
    """The conference talk list from data/fixtures/talks.txt."""
    from track_dispatch.loaders import load_talks

    return load_talks(FIXTURES_DIR / "talks.txt")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def talks():
    return talk_list()


@pytest.fixture
def morning_dispatcher():
    """09:00 start, three hour budget."""
    from track_dispatch.dispatcher import OptimalDispatcher

    return OptimalDispatcher(time(9, 0), timedelta(hours=3))


@pytest.fixture
def busy_timetable():
    """09:00-10:00 and 11:00-11:30 taken."""
    return make_timetable([["09:00", 60], ["11:00", 30]])
