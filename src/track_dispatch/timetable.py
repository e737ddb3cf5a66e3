"""Timetable: ordered, non-overlapping placement of activities by start time."""

from __future__ import annotations

from bisect import bisect_right, insort
from datetime import time, timedelta
from typing import Iterator

from track_dispatch.resolution import DAY, at_offset, since_midnight
from track_dispatch.types import Activity, ErrorKind, TimetableError


class Timetable:
    """Maps start times to activities. Insertions are checked for conflicts.

    Invariants (enforced by put):
        - Starts are unique and kept in ascending order.
        - For consecutive entries s1 < s2: s1 + duration(entry1) <= s2.
        - An open-ended entry is always the last entry.

    There is no removal. A timetable returned by a dispatcher is read-only
    by convention.
    """

    def __init__(self) -> None:
        self._starts: list[time] = []
        self._entries: dict[time, Activity] = {}

    def put(self, start: time, activity: Activity) -> None:
        """Place activity at start. Atomic: on failure nothing changes.

        Raises TimetableError (NULL_INPUT, OVERLAP_WITH_PAST,
        OVERLAP_WITH_FUTURE, OPEN_END_BEFORE_FUTURE).
        Raises ValueError if a fixed activity would run past midnight.
        """
        if start is None or activity is None:
            raise TimetableError(
                ErrorKind.NULL_INPUT, "start and activity are required"
            )

        previous = self._floor(start)
        ongoing_until = self.end_of_active_at(start)
        if (
            start < ongoing_until
            or start in self._entries
            or (previous is not None and previous[1].open_ended)
        ):
            raise TimetableError(
                ErrorKind.OVERLAP_WITH_PAST,
                f"cannot place {activity.title!r} at {start:%H:%M}, "
                f"there is an ongoing activity until {_fmt_end(ongoing_until)}",
            )

        end_offset = since_midnight(start) + activity.duration
        following = self._next_start(start)
        if following is not None:
            if activity.open_ended:
                raise TimetableError(
                    ErrorKind.OPEN_END_BEFORE_FUTURE,
                    f"cannot place open-ended {activity.title!r} at "
                    f"{start:%H:%M} before the activity at {following:%H:%M}",
                )
            if end_offset > since_midnight(following):
                raise TimetableError(
                    ErrorKind.OVERLAP_WITH_FUTURE,
                    f"cannot place {activity.title!r} of "
                    f"{_minutes(activity.duration)}min at {start:%H:%M}, "
                    f"the next activity starts at {following:%H:%M}",
                )

        if not activity.open_ended and end_offset > DAY:
            raise ValueError(
                f"{activity.title!r} at {start:%H:%M} would run past midnight"
            )

        insort(self._starts, start)
        self._entries[start] = activity

    def end_of_active_at(self, t: time) -> time:
        """End of the activity that started at or directly before t.

        time.min if there is no such activity, time.max if it is open-ended.
        An activity ending exactly at midnight also reports time.max.
        """
        previous = self._floor(t)
        if previous is None:
            return time.min
        start, activity = previous
        if activity.open_ended:
            return time.max
        end_offset = since_midnight(start) + activity.duration
        if end_offset >= DAY:
            return time.max
        return at_offset(end_offset)

    def end(self) -> time:
        """End of the last entry (time.min when empty)."""
        if not self._starts:
            return time.min
        return self.end_of_active_at(self._starts[-1])

    def get(self, start: time) -> Activity | None:
        """Activity starting exactly at start, or None."""
        return self._entries.get(start)

    def is_empty(self) -> bool:
        return not self._starts

    def items(self) -> list[tuple[time, Activity]]:
        return [(s, self._entries[s]) for s in self._starts]

    def activities(self) -> list[Activity]:
        return [self._entries[s] for s in self._starts]

    def total_duration(self) -> timedelta:
        """Combined duration of all fixed-duration entries."""
        return sum(
            (a.duration for a in self._entries.values() if not a.open_ended),
            timedelta(0),
        )

    def _floor(self, t: time) -> tuple[time, Activity] | None:
        """Entry starting at or directly before t."""
        i = bisect_right(self._starts, t)
        if i == 0:
            return None
        start = self._starts[i - 1]
        return start, self._entries[start]

    def _next_start(self, t: time) -> time | None:
        i = bisect_right(self._starts, t)
        return self._starts[i] if i < len(self._starts) else None

    def __len__(self) -> int:
        return len(self._starts)

    def __iter__(self) -> Iterator[time]:
        return iter(list(self._starts))

    def __contains__(self, start: object) -> bool:
        return start in self._entries

    def __repr__(self) -> str:
        inner = ", ".join(f"{s:%H:%M}={a.title!r}" for s, a in self.items())
        return f"Timetable({inner})"


def _minutes(d: timedelta) -> int:
    return int(d.total_seconds() // 60)


def _fmt_end(t: time) -> str:
    return "the end of the day" if t == time.max else f"{t:%H:%M}"
