#!/usr/bin/env python
"""Visual verification report for track-dispatch.

Run:  python scripts/verify.py

Produces a formatted report showing:
  1. Timetable insertion checks  -- input/output table
  2. Optimal dispatch scenarios  -- expected vs actual totals and subsets
  3. Conference track for data/fixtures/talks.txt  -- ASCII timetable
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import time, timedelta
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "data" / "fixtures"
SCENARIOS = FIXTURES / "scenarios"

sys.path.insert(0, str(ROOT / "src"))

from track_dispatch.conference import ConferenceDispatcher, unscheduled
from track_dispatch.debug import show_timetable
from track_dispatch.dispatcher import OptimalDispatcher
from track_dispatch.loaders import load_talks
from track_dispatch.timetable import Timetable
from track_dispatch.types import Activity, TimetableError


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        print(fmt.format(*row))


def _activity(title: str, duration: int | None) -> Activity:
    if duration is None:
        return Activity.open_end(title)
    return Activity.minutes(title, duration)


def _time(label: str) -> time:
    return time.max if label == "max" else time.fromisoformat(label)


def _fmt_entry(entry: list) -> str:
    start, duration = entry
    return f"{start}+{'open' if duration is None else f'{duration}m'}"


# ---------------------------------------------------------------------------
# Section 1: Timetable
# ---------------------------------------------------------------------------
def section_timetable():
    banner("TIMETABLE INSERTION")

    rows = []
    for s in _load(SCENARIOS / "timetable.json")["puts"]:
        timetable = Timetable()
        for i, (start, duration) in enumerate(s["existing"]):
            timetable.put(_time(start), _activity(f"E{i}", duration))
        start, duration = s["put"]
        try:
            timetable.put(_time(start), _activity("NEW", duration))
            actual = None
        except TimetableError as e:
            actual = e.kind.value
        match = "OK" if actual == s["expected_kind"] else "FAIL"
        rows.append([
            s["id"],
            ", ".join(_fmt_entry(e) for e in s["existing"]) or "(empty)",
            _fmt_entry(s["put"]),
            actual or "accepted",
            match,
        ])
    table(["ID", "Existing", "Put", "Result", ""], rows)


# ---------------------------------------------------------------------------
# Section 2: Optimal dispatch
# ---------------------------------------------------------------------------
def section_dispatch():
    banner("OPTIMAL DISPATCH")

    rows = []
    for s in _load(SCENARIOS / "dispatch.json")["optimal"]:
        dispatcher = OptimalDispatcher(
            time.fromisoformat(s["start"]), timedelta(minutes=s["budget_minutes"])
        )
        activities = [_activity(f"A{i}", d) for i, d in enumerate(s["durations"])]
        timetable = dispatcher.dispatch(activities)
        total = int(timetable.total_duration().total_seconds() // 60)
        chosen = [a.title for a in timetable.activities()]
        expected = [f"A{i}" for i in s["expected_indices"]]
        match = "OK" if total == s["expected_total"] and chosen == expected else "FAIL"
        rows.append([
            s["id"], s["start"], str(s["budget_minutes"]),
            str(s["durations"]), str(total), ",".join(chosen),
            f"{timetable.end():%H:%M}", match,
        ])
    table(["ID", "Start", "Budget", "Durations", "Total", "Chosen", "End", ""], rows)

    print()
    rows = []
    for s in _load(SCENARIOS / "dispatch.json")["failures"]:
        dispatcher = OptimalDispatcher(time(9, 0), timedelta(minutes=s["budget_minutes"]))
        activities = [_activity(f"A{i}", d) for i, d in enumerate(s["durations"])]
        outcome = dispatcher.try_dispatch(activities)
        actual = outcome.error.value if outcome.error else "ok"
        match = "OK" if actual == s["expected_kind"] else "FAIL"
        rows.append([s["id"], str(s["budget_minutes"]), str(s["durations"]), actual, match])
    table(["ID", "Budget", "Durations", "Error", ""], rows)


# ---------------------------------------------------------------------------
# Section 3: Conference track
# ---------------------------------------------------------------------------
def section_conference():
    banner("CONFERENCE TRACK")

    talks = load_talks(FIXTURES / "talks.txt")
    track = ConferenceDispatcher().dispatch(talks)
    print()
    show_timetable(track, title=f"Track 1 ({len(talks)} talks submitted)")

    left = unscheduled(talks, track)
    if left:
        print()
        table(["Unscheduled", "Min"], [
            [a.title, str(int(a.duration.total_seconds() // 60))] for a in left
        ])


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="    %(name)s: %(message)s")
    section_timetable()
    section_dispatch()
    section_conference()
