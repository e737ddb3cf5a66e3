"""Shared types: Activity, ErrorKind and TimetableError."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

LIGHTNING = timedelta(minutes=5)


@dataclass(frozen=True)
class Activity:
    """Immutable unit of work to be placed on a timetable.

    Invariants:
        - duration >= 0
        - An open-ended activity is only ever the last entry of a timetable;
          its duration is not used for placement.
    """

    title: str
    duration: timedelta = timedelta(0)
    open_ended: bool = False

    def __post_init__(self) -> None:
        if self.duration < timedelta(0):
            raise ValueError(
                f"Activity {self.title!r} has negative duration {self.duration}"
            )

    @classmethod
    def minutes(cls, title: str, n: int) -> Activity:
        return cls(title, timedelta(minutes=n))

    @classmethod
    def lightning(cls, title: str) -> Activity:
        """A lightning talk: fixed five minutes."""
        return cls(title, LIGHTNING)

    @classmethod
    def open_end(cls, title: str) -> Activity:
        return cls(title, timedelta(0), open_ended=True)


class ErrorKind(Enum):
    """Tag for every way a dispatch or timetable insertion can fail."""

    NULL_INPUT = "null_input"
    UNSUPPORTED_OPEN_ENDED = "unsupported_open_ended"
    INFEASIBLE = "infeasible"
    OVERLAP_WITH_PAST = "overlap_with_past"
    OVERLAP_WITH_FUTURE = "overlap_with_future"
    OPEN_END_BEFORE_FUTURE = "open_end_before_future"


class TimetableError(Exception):
    """Raised when activities cannot be dispatched or placed.

    The failure is identified by ``kind``; ``detail`` is a human readable
    description of the offending input.
    """

    def __init__(self, kind: ErrorKind, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}")
