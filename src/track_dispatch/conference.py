"""Conference track: two optimally filled sessions around lunch, then networking."""

from __future__ import annotations

import logging
from datetime import time, timedelta
from typing import Iterable

from track_dispatch.dispatcher import OptimalDispatcher
from track_dispatch.timetable import Timetable
from track_dispatch.types import Activity, ErrorKind, TimetableError

logger = logging.getLogger(__name__)


class ConferenceDispatcher:
    """Builds one conference day on a single track.

    The morning session is filled optimally first. The afternoon session is
    filled optimally from what the morning left over. Lunch sits between the
    sessions and an open-ended networking event closes the day. Activities
    that fit in neither session are left out.
    """

    def __init__(
        self,
        morning_start: time = time(9, 0),
        morning_budget: timedelta = timedelta(hours=3),
        lunch_start: time = time(12, 0),
        lunch_duration: timedelta = timedelta(hours=1),
        afternoon_start: time = time(13, 0),
        afternoon_budget: timedelta = timedelta(hours=4),
        networking_start: time = time(17, 0),
        lunch_title: str = "Lunch",
        networking_title: str = "Networking Event",
    ) -> None:
        self.morning = OptimalDispatcher(morning_start, morning_budget)
        self.afternoon = OptimalDispatcher(afternoon_start, afternoon_budget)
        self.lunch_start = lunch_start
        self.lunch = Activity(lunch_title, lunch_duration)
        self.networking_start = networking_start
        self.networking = Activity.open_end(networking_title)

    def dispatch(self, activities: Iterable[Activity] | None) -> Timetable:
        """Return the day's timetable.

        Raises TimetableError from either session, or OVERLAP_WITH_PAST /
        OVERLAP_WITH_FUTURE if the configured slots collide.
        """
        if activities is None:
            raise TimetableError(ErrorKind.NULL_INPUT, "activities are required")
        events = list(activities)

        morning = self.morning.dispatch(events)
        remaining = unscheduled(events, morning)

        track = Timetable()
        for start, activity in morning.items():
            track.put(start, activity)
        track.put(self.lunch_start, self.lunch)

        if remaining:
            for start, activity in self.afternoon.dispatch(remaining).items():
                track.put(start, activity)
        else:
            logger.debug("nothing left for the afternoon session")

        track.put(self.networking_start, self.networking)

        left_out = unscheduled(events, track)
        if left_out:
            logger.info(
                "%d activities did not fit: %s",
                len(left_out), [a.title for a in left_out],
            )
        return track


def unscheduled(activities: list[Activity], timetable: Timetable) -> list[Activity]:
    """Activities from the list that are not on the timetable.

    Duplicates are matched one for one: two equal activities with only one
    placed leave one unscheduled.
    """
    placed = timetable.activities()
    result: list[Activity] = []
    for activity in activities:
        if activity in placed:
            placed.remove(activity)
        else:
            result.append(activity)
    return result
