"""Data loading utilities for activity lists and dispatcher definitions."""

from __future__ import annotations

import json
import re
from datetime import time, timedelta
from pathlib import Path

from track_dispatch.dispatcher import OptimalDispatcher
from track_dispatch.schema import validate_activities, validate_dispatcher
from track_dispatch.types import Activity

_TALK_LINE = re.compile(
    r"^(?P<title>.+?)\s+(?:(?P<minutes>\d+)\s*min|(?P<lightning>lightning))$"
)


def activities_from_dicts(entries: list[dict]) -> list[Activity]:
    """Build activities from already validated raw entries."""
    result: list[Activity] = []
    for entry in entries:
        if entry.get("open_ended", False):
            result.append(Activity.open_end(entry["title"]))
        else:
            result.append(Activity.minutes(entry["title"], entry["minutes"]))
    return result


def load_activities_json(path: str | Path) -> list[Activity]:
    """Load activities from a JSON file.

    Accepts either a bare list or an object with an "activities" list:
    [
        {"title": "...", "minutes": 45},
        {"title": "...", "open_ended": true}
    ]

    Raises ValueError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    if isinstance(data, dict):
        if "activities" not in data:
            raise ValueError(
                f"Validation errors in {path.name}:\n  - 'activities' missing"
            )
        entries = data["activities"]
    else:
        entries = data
    errors = validate_activities(entries)
    if errors:
        raise ValueError(
            f"Validation errors in {path.name}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return activities_from_dicts(entries)


def load_dispatcher_json(
    path: str | Path,
) -> tuple[OptimalDispatcher, list[Activity]]:
    """Load a dispatcher and its activities from a JSON file.

    {
        "start": "09:00",
        "budget_minutes": 180,
        "activities": [ ... ]
    }

    Raises ValueError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    errors = validate_dispatcher(data)
    if errors:
        raise ValueError(
            f"Validation errors in {path.name}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    dispatcher = OptimalDispatcher(
        time.fromisoformat(data["start"]),
        timedelta(minutes=data["budget_minutes"]),
    )
    return dispatcher, activities_from_dicts(data.get("activities", []))


def parse_talk_line(line: str) -> Activity:
    """Parse one talk list line: "<title> <n>min" or "<title> lightning".

    Raises ValueError for any other shape.
    """
    match = _TALK_LINE.match(line.strip())
    if match is None:
        raise ValueError(
            f"cannot parse talk {line.strip()!r}: "
            f"expected '<title> <n>min' or '<title> lightning'"
        )
    title = match["title"]
    if match["lightning"]:
        return Activity.lightning(title)
    return Activity.minutes(title, int(match["minutes"]))


def load_talks(path: str | Path) -> list[Activity]:
    """Load a plain text talk list, one talk per line. Blank lines are skipped.

    Raises ValueError listing every line that does not parse.
    """
    path = Path(path)
    talks: list[Activity] = []
    errors: list[str] = []
    with open(path) as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                talks.append(parse_talk_line(line))
            except ValueError as e:
                errors.append(f"line {lineno}: {e}")

    if errors:
        raise ValueError(
            f"Validation errors in {path.name}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return talks
