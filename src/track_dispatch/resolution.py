"""Boundary: time of day ↔ offset from midnight, and duration ↔ integer units."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time, timedelta

DAY = timedelta(days=1)


def _reject_aware(t: time, name: str) -> None:
    """Reject timezone-aware times. The scheduling coordinate is naive."""
    if t.tzinfo is not None:
        raise TypeError(
            f"{name} must be a naive time (no tzinfo), "
            f"got tzinfo={t.tzinfo!r}. "
            f"Times are scheduling coordinates, not wall-clock instants."
        )


def since_midnight(t: time) -> timedelta:
    """Offset of a time of day from midnight."""
    _reject_aware(t, "time")
    return timedelta(
        hours=t.hour, minutes=t.minute, seconds=t.second,
        microseconds=t.microsecond,
    )


def at_offset(offset: timedelta) -> time:
    """Time of day at the given offset from midnight.

    Raises ValueError if the offset falls outside [00:00, 24:00).
    """
    if offset < timedelta(0) or offset >= DAY:
        raise ValueError(
            f"offset {offset} is outside a single day. "
            f"Time of day does not wrap past midnight."
        )
    seconds = offset.seconds
    return time(
        seconds // 3600, seconds // 60 % 60, seconds % 60, offset.microseconds
    )


def fits_in_day(start: time, duration: timedelta) -> bool:
    """Whether start + duration ends no later than midnight."""
    return since_midnight(start) + duration <= DAY


@dataclass(frozen=True)
class TimeResolution:
    """Converts between timedelta and integer units. Immutable.

    The search engine sums integers; the unit is set once at the boundary.
    """

    unit_seconds: int
    label: str

    def to_int(self, d: timedelta) -> int:
        """Convert a duration to whole units.

        Raises ValueError if d is not aligned to the resolution.
        """
        unit = timedelta(seconds=self.unit_seconds)
        units, remainder = divmod(d, unit)
        if remainder:
            raise ValueError(
                f"duration {d} does not align to {self.label} "
                f"resolution (unit_seconds={self.unit_seconds}). "
                f"Remainder: {remainder}. "
                f"No implicit rounding, caller must ensure alignment."
            )
        return units

    def to_timedelta(self, n: int) -> timedelta:
        return timedelta(seconds=n * self.unit_seconds)


MINUTE = TimeResolution(unit_seconds=60, label="minute")
SECOND = TimeResolution(unit_seconds=1, label="second")
