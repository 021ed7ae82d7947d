"""
Tests for domain models.
"""

import pendulum
import pytest
from datetime import time

from bookingslots.domain.exceptions import InvalidInputError
from bookingslots.domain.models import (
    AvailabilityTemplate,
    DateSlots,
    Meeting,
    TimeRange,
    Weekday,
    WeekdayAvailability,
    WeekdayTemplate,
    combine,
    format_date,
    format_time_of_day,
    parse_time_of_day,
)


class TestTimeRange:
    """Tests for TimeRange model."""

    def test_create_valid_time_range(self):
        """Test creating a valid time range."""
        start = pendulum.parse("2024-11-25 09:00", tz="UTC")
        end = pendulum.parse("2024-11-25 17:00", tz="UTC")

        tr = TimeRange(start=start, end=end)

        assert tr.start == start
        assert tr.end == end

    def test_invalid_time_range_raises_error(self):
        """Test that creating an invalid time range raises ValueError."""
        start = pendulum.parse("2024-11-25 17:00", tz="UTC")
        end = pendulum.parse("2024-11-25 09:00", tz="UTC")

        with pytest.raises(ValueError, match="Start time .* must be before end time"):
            TimeRange(start=start, end=end)

    def test_overlaps_meeting(self):
        """Half-open overlap: touching boundaries are not conflicts."""
        slot = TimeRange(
            start=pendulum.parse("2024-11-25 11:30", tz="UTC"),
            end=pendulum.parse("2024-11-25 12:00", tz="UTC")
        )
        touching = Meeting(
            start=pendulum.parse("2024-11-25 12:00", tz="UTC"),
            end=pendulum.parse("2024-11-25 12:30", tz="UTC")
        )
        crossing = Meeting(
            start=pendulum.parse("2024-11-25 11:45", tz="UTC"),
            end=pendulum.parse("2024-11-25 12:15", tz="UTC")
        )

        assert not slot.overlaps(touching)
        assert slot.overlaps(crossing)


class TestWeekday:
    """Tests for the Sunday-first weekday enumeration."""

    def test_declaration_order_is_sunday_first(self):
        assert [day.index for day in Weekday] == list(range(7))
        assert Weekday.SUNDAY.index == 0
        assert Weekday.SATURDAY.index == 6

    def test_of_date(self):
        assert Weekday.of(pendulum.date(2024, 11, 24)) == Weekday.SUNDAY
        assert Weekday.of(pendulum.date(2024, 11, 25)) == Weekday.MONDAY
        assert Weekday.of(pendulum.date(2024, 11, 30)) == Weekday.SATURDAY

    def test_parse_is_case_insensitive(self):
        assert Weekday.parse("monday") == Weekday.MONDAY
        assert Weekday.parse(" Friday ") == Weekday.FRIDAY

    def test_parse_unknown_weekday(self):
        with pytest.raises(InvalidInputError, match="Unknown weekday"):
            Weekday.parse("Funday")


class TestTimeOfDay:
    """Tests for time-of-day parsing, formatting and combining."""

    def test_parse_and_format(self):
        parsed = parse_time_of_day("09:30")

        assert parsed == time(9, 30)
        assert format_time_of_day(parsed) == "09:30"

    def test_parse_rejects_garbage(self):
        with pytest.raises(InvalidInputError):
            parse_time_of_day("half past nine")

    def test_combine_uses_timezone(self):
        combined = combine(pendulum.date(2024, 11, 25), time(9, 0), "Europe/Berlin")

        assert combined == pendulum.datetime(2024, 11, 25, 8, 0, tz="UTC")
        assert combined.format("HH:mm") == "09:00"

    def test_format_date(self):
        assert format_date(pendulum.date(2024, 3, 5)) == "2024-03-05"


class TestMeeting:
    """Tests for Meeting date filtering."""

    def test_starts_on_in_timezone(self):
        meeting = Meeting(
            start=pendulum.datetime(2024, 11, 25, 23, 30, tz="UTC"),
            end=pendulum.datetime(2024, 11, 26, 0, 0, tz="UTC"),
        )

        assert meeting.starts_on(pendulum.date(2024, 11, 25), "UTC")
        assert meeting.starts_on(pendulum.date(2024, 11, 26), "Europe/Berlin")


class TestSerialisation:
    """Output dictionaries use the public response keys."""

    def test_weekday_availability_to_dict(self):
        result = WeekdayAvailability(
            day=Weekday.MONDAY,
            is_available=True,
            dates=[DateSlots(date=pendulum.date(2024, 11, 25), slots=["09:00", "09:30"])],
        )

        assert result.to_dict() == {
            "day": "MONDAY",
            "isAvailable": True,
            "dates": [{"dateStr": "2024-11-25", "slots": ["09:00", "09:30"]}],
        }

    def test_template_keyed_by_weekday(self):
        monday = WeekdayTemplate(Weekday.MONDAY, time(9, 0), time(17, 0), True)
        template = AvailabilityTemplate.from_days([monday], time_gap=15)

        assert template.for_day(Weekday.MONDAY) is monday
        assert template.for_day(Weekday.TUESDAY) is None
        assert template.time_gap == 15
        assert template.has_days()
        assert not AvailabilityTemplate().has_days()
        assert monday.to_dict() == {
            "day": "MONDAY",
            "startTime": "09:00",
            "endTime": "17:00",
            "isAvailable": True,
        }
