"""
Bookable start-time generation for a single date.

Pure domain logic: the current moment is captured once at construction and
every cutoff decision is taken against that same instant.
"""

import logging
from datetime import time
from typing import Iterable, List

from pendulum import Date, DateTime

from .models import TIME_FORMAT, Meeting, TimeRange, combine

logger = logging.getLogger(__name__)


class TimeSlotGenerator:
    """
    Generates bookable slot start times inside one day's availability window.

    Algorithm:
    1. Place the window's wall-clock start/end on the requested date
    2. If the date is today and the window has already closed, stop
    3. Keep only the meetings that start on the requested date
    4. Step from window start to window end (inclusive) by ``gap`` minutes,
       skipping past candidates when the date is today
    5. Accept candidates whose ``[start, start + duration)`` range does not
       overlap any of the remaining meetings
    """

    def __init__(self, now: DateTime):
        self.now = now
        self.tz = now.timezone

    @property
    def today(self) -> Date:
        return self.now.date()

    def generate(
        self,
        window_start: time,
        window_end: time,
        duration: int,
        meetings: Iterable[Meeting],
        date: Date,
        gap: int = 30,
        is_lookahead_probe: bool = False,
    ) -> List[str]:
        """
        Produce the ``HH:mm`` start times that are free on ``date``.

        Args:
            window_start: Wall-clock start of the availability window
            window_end: Wall-clock end of the window; a candidate starting
                exactly here is still emitted
            duration: Meeting duration in minutes
            meetings: Blocking meetings (any date; filtered here)
            date: Calendar date to generate slots for
            gap: Minutes between successive candidate start times
            is_lookahead_probe: Set by the occurrence search; does not change
                the result

        Returns:
            Accepted start times in ascending order
        """
        if gap <= 0:
            logger.warning("Ignoring non-positive time gap of %s minutes", gap)
            return []

        slot_start = combine(date, window_start, self.tz)
        slot_end = combine(date, window_end, self.tz)
        is_today = date == self.today

        if is_today and self.now > slot_end:
            return []

        meetings_for_date = [
            meeting for meeting in meetings
            if meeting.starts_on(date, self.tz)
        ]

        slots: List[str] = []
        candidate = slot_start

        while candidate <= slot_end:
            if not is_today or candidate >= self.now:
                slot = TimeRange(start=candidate, end=candidate.add(minutes=duration))
                if self._is_free(slot, meetings_for_date):
                    slots.append(candidate.format(TIME_FORMAT))
            candidate = candidate.add(minutes=gap)

        if is_lookahead_probe:
            logger.debug("Probe for %s found %d open slot(s)", date, len(slots))

        return slots

    @staticmethod
    def _is_free(slot: TimeRange, meetings: List[Meeting]) -> bool:
        return not any(slot.overlaps(meeting) for meeting in meetings)
