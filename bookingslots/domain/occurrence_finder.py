"""
Search for the next calendar dates a weekday falls on.
"""

from typing import List, Optional, Sequence

from pendulum import Date

from .models import Meeting, Weekday, WeekdayTemplate
from .slot_generator import TimeSlotGenerator

DEFAULT_OCCURRENCES = 4


class OccurrenceFinder:
    """
    Finds upcoming occurrences of a weekday.

    Today counts as an occurrence when it matches the weekday, unless a probe
    shows it has no open slot left; in that case the search starts from next
    week so that every returned date is still bookable in principle.
    """

    def __init__(self, slot_generator: TimeSlotGenerator):
        self.slot_generator = slot_generator

    def next_dates(
        self,
        weekday: Weekday,
        template: Optional[WeekdayTemplate] = None,
        duration: Optional[int] = None,
        meetings: Optional[Sequence[Meeting]] = None,
        gap: Optional[int] = None,
        count: int = DEFAULT_OCCURRENCES,
    ) -> List[Date]:
        """
        Return the next ``count`` dates falling on ``weekday``, ascending.

        The today-probe only runs when template, duration, meetings and gap
        are all given.
        """
        today = self.slot_generator.today
        days_ahead = (weekday.index - Weekday.of(today).index + 7) % 7
        can_probe = (
            template is not None
            and duration is not None
            and meetings is not None
            and gap is not None
        )

        dates: List[Date] = []
        week_offset = 0

        while len(dates) < count:
            days_until_target = days_ahead + 7 * week_offset
            candidate = today.add(days=days_until_target)
            week_offset += 1

            if days_until_target == 0 and can_probe:
                slots = self.slot_generator.generate(
                    template.start_time,
                    template.end_time,
                    duration,
                    meetings,
                    candidate,
                    gap,
                    is_lookahead_probe=True,
                )
                if not slots:
                    continue

            dates.append(candidate)

        return dates
