"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import (
    AvailabilityTemplate,
    DateSlots,
    Event,
    Meeting,
    OwnerAvailability,
    TimeRange,
    Weekday,
    WeekdayAvailability,
    WeekdayTemplate,
)
from .occurrence_finder import OccurrenceFinder
from .planner import WeeklyAvailabilityPlanner
from .slot_generator import TimeSlotGenerator

__all__ = [
    "AvailabilityTemplate",
    "DateSlots",
    "Event",
    "Meeting",
    "OwnerAvailability",
    "TimeRange",
    "Weekday",
    "WeekdayAvailability",
    "WeekdayTemplate",
    "OccurrenceFinder",
    "WeeklyAvailabilityPlanner",
    "TimeSlotGenerator",
]
