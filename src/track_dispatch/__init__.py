"""track-dispatch: Optimal selection and placement of activities on a timetable."""

from track_dispatch.conference import ConferenceDispatcher, unscheduled
from track_dispatch.dispatcher import (
    Candidate,
    DispatchOutcome,
    Dispatcher,
    OptimalDispatcher,
    search_optimal_subset,
)
from track_dispatch.resolution import MINUTE, SECOND, TimeResolution
from track_dispatch.timetable import Timetable
from track_dispatch.types import Activity, ErrorKind, TimetableError

__all__ = [
    "Activity",
    "Candidate",
    "ConferenceDispatcher",
    "DispatchOutcome",
    "Dispatcher",
    "ErrorKind",
    "MINUTE",
    "OptimalDispatcher",
    "SECOND",
    "TimeResolution",
    "Timetable",
    "TimetableError",
    "search_optimal_subset",
    "unscheduled",
]
