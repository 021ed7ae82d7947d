"""
Weekly availability planning for guests and owners.
"""

from datetime import time
from typing import List, Optional, Sequence

from pendulum import DateTime

from .models import (
    AvailabilityTemplate,
    DateSlots,
    Event,
    Meeting,
    OwnerAvailability,
    Weekday,
    WeekdayAvailability,
    WeekdayTemplate,
)
from .occurrence_finder import DEFAULT_OCCURRENCES, OccurrenceFinder
from .slot_generator import TimeSlotGenerator

DEFAULT_WINDOW_START = time(9, 0)
DEFAULT_WINDOW_END = time(17, 0)


class WeeklyAvailabilityPlanner:
    """
    Builds availability responses from a weekly template.

    All computation is a pure function of the inputs and ``now``; calling a
    method twice with the same arguments yields the same result.
    """

    def __init__(self, now: DateTime, lookahead_weeks: int = DEFAULT_OCCURRENCES):
        self.now = now
        self.lookahead_weeks = lookahead_weeks
        self.slot_generator = TimeSlotGenerator(now=now)
        self.occurrence_finder = OccurrenceFinder(self.slot_generator)

    def build_public_availability(
        self,
        event: Event,
        template: Optional[AvailabilityTemplate],
        meetings: Sequence[Meeting],
    ) -> List[WeekdayAvailability]:
        """
        Compute the guest-facing availability of an event.

        Weekdays are reported Sunday to Saturday; weekdays missing from the
        template are left out. Every upcoming date with at least one open
        slot is kept.

        Returns:
            Empty list for private events or a missing template
        """
        if template is None or event.is_private:
            return []

        results: List[WeekdayAvailability] = []

        for weekday in Weekday:
            day_template = template.for_day(weekday)
            if day_template is None:
                continue

            candidate_dates = self.occurrence_finder.next_dates(
                weekday,
                template=day_template,
                duration=event.duration,
                meetings=meetings,
                gap=template.time_gap,
                count=self.lookahead_weeks,
            )

            dates: List[DateSlots] = []
            for candidate in candidate_dates:
                slots = self._slots_for(day_template, event, meetings, candidate, template.time_gap)
                if slots:
                    dates.append(DateSlots(date=candidate, slots=slots))

            results.append(
                WeekdayAvailability(
                    day=weekday,
                    is_available=day_template.is_available,
                    dates=dates,
                )
            )

        return results

    def _slots_for(self, day_template, event, meetings, date, gap) -> List[str]:
        if not day_template.is_available:
            return []
        return self.slot_generator.generate(
            day_template.start_time,
            day_template.end_time,
            event.duration,
            meetings,
            date,
            gap,
        )

    @staticmethod
    def build_owner_availability(
        template: AvailabilityTemplate,
        default_start: time = DEFAULT_WINDOW_START,
        default_end: time = DEFAULT_WINDOW_END,
    ) -> OwnerAvailability:
        """
        Present the stored template to its owner.

        Weekdays without a stored row are filled with an unavailable default
        window, so the result always lists all seven days, Sunday first.
        """
        days = [
            template.for_day(weekday) or WeekdayTemplate(
                day=weekday,
                start_time=default_start,
                end_time=default_end,
                is_available=False,
            )
            for weekday in Weekday
        ]
        return OwnerAvailability(time_gap=template.time_gap, days=days)
