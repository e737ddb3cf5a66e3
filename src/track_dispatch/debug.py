"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from datetime import time

from track_dispatch.timetable import Timetable


def show_timetable(timetable: Timetable, title: str | None = None) -> str:
    """Print one row per entry: start, end, length and title.

    Open-ended entries show '...' as their end. A final line totals the
    fixed-duration entries.
    Returns the string and also prints to stdout.
    """
    lines: list[str] = []
    if title:
        lines.append(title)
        lines.append("-" * len(title))

    for start, activity in timetable.items():
        if activity.open_ended:
            end, length = "...", ""
        else:
            end_t = timetable.end_of_active_at(start)
            end = "24:00" if end_t == time.max else f"{end_t:%H:%M}"
            length = f"{int(activity.duration.total_seconds() // 60)}min"
        lines.append(f"{start:%H:%M}  {end:>5s}  {length:>6s}  {activity.title}")

    if timetable.is_empty():
        lines.append("(empty)")

    total_minutes = int(timetable.total_duration().total_seconds() // 60)
    lines.append(f"Total: {total_minutes}min in {len(timetable)} entries")

    result = "\n".join(lines)
    print(result)
    return result
