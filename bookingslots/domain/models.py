"""
Domain models for weekly availability templates and slot results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import pendulum
from pendulum import Date, DateTime
from pendulum.tz.timezone import FixedTimezone, Timezone

from .exceptions import InvalidInputError

TimezoneLike = Union[str, Timezone, FixedTimezone]

TIME_FORMAT = "HH:mm"
DATE_FORMAT = "YYYY-MM-DD"


class Weekday(Enum):
    """Days of the week, declared Sunday first."""

    SUNDAY = "SUNDAY"
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"

    @property
    def index(self) -> int:
        """Sunday-first ordinal, 0-6."""
        return list(Weekday).index(self)

    @classmethod
    def of(cls, date: Date) -> "Weekday":
        """Get the weekday a calendar date falls on."""
        # isoweekday: Monday=1 ... Sunday=7
        return list(cls)[date.isoweekday() % 7]

    @classmethod
    def parse(cls, value: Union[str, "Weekday"]) -> "Weekday":
        """Parse a weekday name case-insensitively."""
        if isinstance(value, Weekday):
            return value
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError) as exc:
            raise InvalidInputError(f"Unknown weekday: {value!r}") from exc


def combine(date: Date, time_of_day: time, tz: TimezoneLike) -> DateTime:
    """Place a wall-clock time on a calendar date in the given timezone."""
    return pendulum.datetime(
        date.year,
        date.month,
        date.day,
        time_of_day.hour,
        time_of_day.minute,
        time_of_day.second,
        tz=tz,
    )


def parse_time_of_day(value: Union[str, time]) -> time:
    """
    Parse an ``HH:mm`` string into a time-of-day value.

    Raises:
        InvalidInputError: If the value is not a valid ``HH:mm`` time
    """
    if isinstance(value, time):
        return value
    try:
        return pendulum.from_format(value.strip(), TIME_FORMAT).time()
    except (AttributeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid time of day {value!r}, expected HH:mm") from exc


def format_time_of_day(value: time) -> str:
    return value.strftime("%H:%M")


def format_date(value: Date) -> str:
    return value.format(DATE_FORMAT)


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable time range with start and end datetime.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def overlaps(self, other: Union["TimeRange", "Meeting"]) -> bool:
        """
        Check if this range overlaps with another.

        Ranges touching at an exact boundary do not overlap.
        """
        return self.start < other.end and self.end > other.start


@dataclass(frozen=True)
class Meeting:
    """An existing booking that blocks overlapping slots."""
    start: DateTime
    end: DateTime
    id: Optional[str] = None
    event_id: Optional[str] = None

    def starts_on(self, date: Date, tz: TimezoneLike) -> bool:
        """Check whether the meeting starts on the given date in ``tz``."""
        return pendulum.instance(self.start).in_timezone(tz).date() == date


@dataclass(frozen=True)
class Event:
    """A bookable event type."""
    id: str
    duration: int  # minutes
    user_id: str
    is_private: bool = False


@dataclass(frozen=True)
class WeekdayTemplate:
    """
    Availability window for one day of the week.

    ``start_time > end_time`` is tolerated and produces no slots.
    """
    day: Weekday
    start_time: time
    end_time: time
    is_available: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day.value,
            "startTime": format_time_of_day(self.start_time),
            "endTime": format_time_of_day(self.end_time),
            "isAvailable": self.is_available,
        }


@dataclass
class AvailabilityTemplate:
    """A user's weekly availability: one time gap and up to seven weekdays."""
    time_gap: int = 30  # minutes
    days: Dict[Weekday, WeekdayTemplate] = field(default_factory=dict)

    @classmethod
    def from_days(cls, days: List[WeekdayTemplate], time_gap: int = 30) -> "AvailabilityTemplate":
        return cls(time_gap=time_gap, days={day.day: day for day in days})

    def for_day(self, weekday: Weekday) -> Optional[WeekdayTemplate]:
        return self.days.get(weekday)

    def has_days(self) -> bool:
        return bool(self.days)


@dataclass(frozen=True)
class DateSlots:
    """Bookable start times on one concrete date."""
    date: Date
    slots: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"dateStr": format_date(self.date), "slots": list(self.slots)}


@dataclass(frozen=True)
class WeekdayAvailability:
    """Guest-facing availability for one weekday across the lookahead horizon."""
    day: Weekday
    is_available: bool
    dates: List[DateSlots]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day.value,
            "isAvailable": self.is_available,
            "dates": [date_slots.to_dict() for date_slots in self.dates],
        }


@dataclass(frozen=True)
class OwnerAvailability:
    """Owner-facing view of the weekly template."""
    time_gap: int
    days: List[WeekdayTemplate]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timeGap": self.time_gap,
            "days": [day.to_dict() for day in self.days],
        }
