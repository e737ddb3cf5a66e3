"""Hypothesis property-based tests.

Properties that must hold for all valid inputs, verified by random generation.
The subset search is checked against an independent brute force over all
subsets, so inputs are kept small.
"""

from __future__ import annotations

from datetime import time
from itertools import combinations

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from conftest import make_activities, minutes


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

# Activity lengths in minutes: lightning talks up to half a day
_durations = st.lists(st.integers(min_value=1, max_value=240), min_size=1, max_size=8)

_budgets = st.integers(min_value=0, max_value=480)

_starts = st.sampled_from([time(0, 0), time(8, 0), time(9, 0), time(13, 0)])


def _brute_force_best(durations: list[int], budget: int) -> int:
    best = 0
    for k in range(len(durations) + 1):
        for combo in combinations(durations, k):
            total = sum(combo)
            if best < total <= budget:
                best = total
    return best


def _dispatch(start: time, budget: int, durations: list[int]):
    from track_dispatch.dispatcher import OptimalDispatcher

    return OptimalDispatcher(start, minutes(budget)).dispatch(
        make_activities(durations)
    )


# ---------------------------------------------------------------------------
# Property: optimality and feasibility
# ---------------------------------------------------------------------------
class TestOptimality:

    @given(durations=_durations, budget=_budgets)
    @settings(max_examples=100)
    def test_search_matches_brute_force(self, durations, budget):
        """search_optimal_subset finds the brute-force maximum."""
        from track_dispatch.dispatcher import search_optimal_subset

        best = search_optimal_subset(durations, budget)
        assert best.total == _brute_force_best(durations, budget)
        assert best.total == sum(durations[i] for i in best.included())

    @given(durations=_durations, budget=_budgets, start=_starts)
    @settings(max_examples=50)
    def test_dispatch_total_is_optimal(self, durations, budget, start):
        """Scheduled duration equals the best achievable total."""
        assume(min(durations) <= budget)
        timetable = _dispatch(start, budget, durations)
        assert timetable.total_duration() == minutes(
            _brute_force_best(durations, budget)
        )

    @given(durations=_durations, budget=_budgets, start=_starts)
    @settings(max_examples=50)
    def test_within_budget(self, durations, budget, start):
        """Everything placed fits within the budget."""
        assume(min(durations) <= budget)
        timetable = _dispatch(start, budget, durations)
        assert timetable.total_duration() <= minutes(budget)
        assert not timetable.is_empty()


# ---------------------------------------------------------------------------
# Property: no overlap
# ---------------------------------------------------------------------------
class TestNoOverlap:

    @given(durations=_durations, budget=_budgets, start=_starts)
    @settings(max_examples=50)
    def test_consecutive_entries(self, durations, budget, start):
        """Each entry starts exactly where the previous one ends."""
        assume(min(durations) <= budget)
        timetable = _dispatch(start, budget, durations)
        items = timetable.items()
        assert items[0][0] == start
        for (prev_start, _), (next_start, _) in zip(items, items[1:]):
            assert timetable.end_of_active_at(prev_start) <= next_start

    @given(
        entries=st.lists(
            st.tuples(
                st.integers(min_value=0, max_value=23 * 60),
                st.integers(min_value=1, max_value=120),
            ),
            max_size=12,
        )
    )
    @settings(max_examples=50)
    def test_random_puts_never_overlap(self, entries):
        """Whatever put accepts, the table stays non-overlapping."""
        from track_dispatch.timetable import Timetable
        from track_dispatch.types import Activity, TimetableError

        timetable = Timetable()
        for i, (offset, length) in enumerate(entries):
            at = time(offset // 60, offset % 60)
            try:
                timetable.put(at, Activity.minutes(f"R{i}", length))
            except (TimetableError, ValueError):
                pass

        items = timetable.items()
        for (prev_start, _), (next_start, _) in zip(items, items[1:]):
            assert timetable.end_of_active_at(prev_start) <= next_start


# ---------------------------------------------------------------------------
# Property: repeatability and failure detection
# ---------------------------------------------------------------------------
class TestRepeatability:

    @given(durations=_durations, budget=_budgets)
    @settings(max_examples=30)
    def test_same_input_same_result(self, durations, budget):
        """Repeated calls report the same total and the same choice."""
        assume(min(durations) <= budget)
        first = _dispatch(time(9, 0), budget, durations)
        second = _dispatch(time(9, 0), budget, durations)
        assert first.total_duration() == second.total_duration()
        assert first.items() == second.items()

    @given(durations=_durations, data=st.data())
    @settings(max_examples=30)
    def test_infeasible_when_nothing_fits(self, durations, data):
        from track_dispatch.dispatcher import OptimalDispatcher
        from track_dispatch.types import ErrorKind

        budget = data.draw(st.integers(min_value=0, max_value=min(durations) - 1))
        outcome = OptimalDispatcher(time(9, 0), minutes(budget)).try_dispatch(
            make_activities(durations)
        )
        assert outcome.error is ErrorKind.INFEASIBLE


# ---------------------------------------------------------------------------
# Property: every subset is generated exactly once
# ---------------------------------------------------------------------------
class TestEnumeration:

    @given(width=st.integers(min_value=0, max_value=10))
    @settings(max_examples=11)
    def test_children_enumerate_power_set(self, width):
        """Expanding every candidate yields each of the 2^n subsets once."""
        from track_dispatch.dispatcher import Candidate

        durations = [1] * width
        seen: list[int] = []
        frontier = [Candidate.full(durations)]
        while frontier:
            seen.extend(c.mask for c in frontier)
            frontier = [ch for c in frontier for ch in c.children(durations)]

        assert len(seen) == 2 ** width
        assert len(set(seen)) == 2 ** width
