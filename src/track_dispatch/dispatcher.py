"""Optimal dispatch: exact subset-sum maximisation under a time budget.

The dispatcher picks, from a list of fixed-duration activities, a subset whose
combined duration is as large as possible without exceeding the budget, then
lays the subset out back to back from the start time in input order.

Search
------
Each candidate is a bit-set over the input (bit i set = activity i taken).
Starting from the full set, every candidate that exceeds the budget is
replaced by the candidates obtained by clearing one more bit, restricted to
indices above the highest bit cleared so far. That restriction yields every
subset at most once. A candidate within budget is a solution and is never
expanded: dropping more activities from it cannot increase its total.

Worst case is O(2^n) candidates, but large feasible subsets cut the search
short. Among solutions with equal totals the one whose included index set is
lexicographically smallest wins, so results are reproducible.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import time, timedelta
from typing import Iterable, Iterator, Protocol, Sequence

from track_dispatch.resolution import SECOND, TimeResolution, fits_in_day
from track_dispatch.timetable import Timetable
from track_dispatch.types import Activity, ErrorKind, TimetableError

logger = logging.getLogger(__name__)


class Dispatcher(Protocol):
    """Anything that turns a collection of activities into a timetable."""

    def dispatch(self, activities: Iterable[Activity]) -> Timetable:
        ...


@dataclass(frozen=True, slots=True)
class Candidate:
    """One point of the search space. Immutable.

    Invariants:
        - total == sum of durations whose bit is set in mask
        - every bit above last_cleared is set
    """

    mask: int
    width: int
    total: int
    last_cleared: int = -1

    @classmethod
    def empty(cls, width: int) -> Candidate:
        """Nothing included. Every bit counts as cleared."""
        return cls(0, width, 0, width - 1)

    @classmethod
    def full(cls, durations: Sequence[int]) -> Candidate:
        width = len(durations)
        return cls((1 << width) - 1, width, sum(durations))

    def included(self) -> tuple[int, ...]:
        return tuple(i for i in range(self.width) if self.mask >> i & 1)

    def is_solution(self, budget: int) -> bool:
        return self.total <= budget

    def children(self, durations: Sequence[int]) -> Iterator[Candidate]:
        """Subsets with one more bit cleared, above last_cleared."""
        for i in range(self.last_cleared + 1, self.width):
            yield Candidate(
                self.mask & ~(1 << i), self.width, self.total - durations[i], i
            )


def _better(a: Candidate, b: Candidate) -> bool:
    """Whether a beats b: larger total, then smaller included index set."""
    if a.total != b.total:
        return a.total > b.total
    return a.included() < b.included()


def search_optimal_subset(durations: Sequence[int], budget: int) -> Candidate:
    """Return a maximal-total subset with total <= budget.

    Pure function of its arguments. Durations and budget are integer units.
    The empty set is always a solution, so this never fails.
    """
    frontier = [Candidate.full(durations)]
    best = Candidate.empty(len(durations))
    rounds = 0

    while frontier:
        open_candidates: list[Candidate] = []
        for candidate in frontier:
            if candidate.is_solution(budget):
                if _better(candidate, best):
                    best = candidate
            else:
                open_candidates.append(candidate)

        logger.debug(
            "round %d: %d candidates, %d over budget",
            rounds, len(frontier), len(open_candidates),
        )
        frontier = [
            child
            for candidate in open_candidates
            for child in candidate.children(durations)
        ]
        rounds += 1

    return best


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of try_dispatch: exactly one of timetable / error is set."""

    timetable: Timetable | None = None
    error: ErrorKind | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


class OptimalDispatcher:
    """Dispatches an optimal subset of activities from start within budget.

    Holds configuration only. Each dispatch call owns its search state, so
    one instance can be shared and reused.
    """

    def __init__(
        self,
        start: time,
        budget: timedelta,
        resolution: TimeResolution = SECOND,
    ) -> None:
        if start is None or budget is None:
            raise TimetableError(
                ErrorKind.NULL_INPUT, "start and budget are required"
            )
        if budget < timedelta(0):
            raise ValueError(f"budget must be non-negative, got {budget}")
        if not fits_in_day(start, budget):
            raise ValueError(
                f"a budget of {budget} from {start:%H:%M} runs past midnight"
            )
        self.start = start
        self.budget = budget
        self.resolution = resolution

    def dispatch(self, activities: Iterable[Activity] | None) -> Timetable:
        """Return a timetable holding an optimal subset of activities.

        Raises TimetableError (NULL_INPUT, UNSUPPORTED_OPEN_ENDED,
        INFEASIBLE) before any search begins.
        Raises ValueError if a duration does not align to the resolution.
        """
        events = self._validate(activities)
        placeable = [a for a in events if a.duration > timedelta(0)]
        durations = [self.resolution.to_int(a.duration) for a in placeable]
        budget = self.resolution.to_int(self.budget)

        best = search_optimal_subset(durations, budget)
        logger.info(
            "dispatched %d of %d activities from %s: %s of %s",
            len(best.included()), len(events), self.start.isoformat("minutes"),
            self.resolution.to_timedelta(best.total), self.budget,
        )
        if not best.mask:
            # only zero-length activities fit
            zero = next(a for a in events if a.duration == timedelta(0))
            timetable = Timetable()
            timetable.put(self.start, zero)
            return timetable
        return self._place(placeable, best)

    def try_dispatch(self, activities: Iterable[Activity] | None) -> DispatchOutcome:
        """Like dispatch, but reports failure as a value instead of raising."""
        try:
            return DispatchOutcome(timetable=self.dispatch(activities))
        except TimetableError as e:
            return DispatchOutcome(error=e.kind, detail=e.detail)

    def _validate(self, activities: Iterable[Activity] | None) -> list[Activity]:
        """Checks in order: presence, fixed duration, feasibility.

        Zero-length activities count towards feasibility here, but dispatch
        leaves them out of the search: they add nothing to the total and
        cannot share a start time with their successor.
        """
        if activities is None:
            raise TimetableError(ErrorKind.NULL_INPUT, "activities are required")
        events = list(activities)
        if any(a is None for a in events):
            raise TimetableError(
                ErrorKind.NULL_INPUT, "activities must not contain None"
            )

        open_ended = [a.title for a in events if a.open_ended]
        if open_ended:
            raise TimetableError(
                ErrorKind.UNSUPPORTED_OPEN_ENDED,
                f"all activities must be of fixed duration, got {open_ended}",
            )

        if not any(a.duration <= self.budget for a in events):
            raise TimetableError(
                ErrorKind.INFEASIBLE,
                f"no activity fits within the budget of {self.budget}",
            )
        return events

    def _place(self, events: list[Activity], best: Candidate) -> Timetable:
        timetable = Timetable()
        for i in best.included():
            at = self.start if timetable.is_empty() else timetable.end()
            timetable.put(at, events[i])
        return timetable
