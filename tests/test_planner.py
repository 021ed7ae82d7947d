"""
Tests for the weekly availability planner.
"""

import pendulum
from datetime import time

from bookingslots.domain.models import (
    AvailabilityTemplate,
    Event,
    Meeting,
    Weekday,
    WeekdayTemplate,
)
from bookingslots.domain.planner import WeeklyAvailabilityPlanner


NOW = pendulum.datetime(2024, 11, 25, 8, 0, tz="UTC")  # Monday morning
EVENT = Event(id="intro-call", duration=30, user_id="alice")


def _template() -> AvailabilityTemplate:
    return AvailabilityTemplate.from_days(
        [
            WeekdayTemplate(Weekday.TUESDAY, time(9, 0), time(10, 0), is_available=False),
            WeekdayTemplate(Weekday.MONDAY, time(9, 0), time(10, 0), is_available=True),
        ],
        time_gap=30,
    )


class TestPublicAvailability:
    """Tests for the guest-facing availability."""

    def test_weekdays_in_template_only_sunday_first(self):
        planner = WeeklyAvailabilityPlanner(now=NOW)

        result = planner.build_public_availability(EVENT, _template(), [])

        assert [day.day for day in result] == [Weekday.MONDAY, Weekday.TUESDAY]

    def test_all_upcoming_dates_with_slots_are_kept(self):
        planner = WeeklyAvailabilityPlanner(now=NOW)

        monday = planner.build_public_availability(EVENT, _template(), [])[0]

        assert monday.is_available
        assert [entry.to_dict() for entry in monday.dates] == [
            {"dateStr": date, "slots": ["09:00", "09:30", "10:00"]}
            for date in ["2024-11-25", "2024-12-02", "2024-12-09", "2024-12-16"]
        ]

    def test_unavailable_weekday_has_no_dates(self):
        planner = WeeklyAvailabilityPlanner(now=NOW)

        tuesday = planner.build_public_availability(EVENT, _template(), [])[1]

        assert tuesday.to_dict() == {"day": "TUESDAY", "isAvailable": False, "dates": []}

    def test_fully_booked_date_is_dropped(self):
        planner = WeeklyAvailabilityPlanner(now=NOW)
        meetings = [
            Meeting(
                start=pendulum.datetime(2024, 12, 2, 9, 0, tz="UTC"),
                end=pendulum.datetime(2024, 12, 2, 10, 30, tz="UTC"),
            )
        ]

        monday = planner.build_public_availability(EVENT, _template(), meetings)[0]

        assert [entry.to_dict()["dateStr"] for entry in monday.dates] == [
            "2024-11-25", "2024-12-09", "2024-12-16"
        ]

    def test_passed_today_is_replaced_by_later_week(self):
        planner = WeeklyAvailabilityPlanner(now=pendulum.datetime(2024, 11, 25, 11, 0, tz="UTC"))

        monday = planner.build_public_availability(EVENT, _template(), [])[0]

        assert [entry.to_dict()["dateStr"] for entry in monday.dates] == [
            "2024-12-02", "2024-12-09", "2024-12-16", "2024-12-23"
        ]

    def test_private_event_or_missing_template_is_empty(self):
        planner = WeeklyAvailabilityPlanner(now=NOW)
        private = Event(id="sync", duration=30, user_id="alice", is_private=True)

        assert planner.build_public_availability(private, _template(), []) == []
        assert planner.build_public_availability(EVENT, None, []) == []

    def test_lookahead_weeks(self):
        planner = WeeklyAvailabilityPlanner(now=NOW, lookahead_weeks=2)

        monday = planner.build_public_availability(EVENT, _template(), [])[0]

        assert len(monday.dates) == 2

    def test_idempotent(self):
        planner = WeeklyAvailabilityPlanner(now=NOW)
        meetings = [
            Meeting(
                start=pendulum.datetime(2024, 11, 25, 9, 30, tz="UTC"),
                end=pendulum.datetime(2024, 11, 25, 10, 0, tz="UTC"),
            )
        ]

        first = planner.build_public_availability(EVENT, _template(), meetings)
        second = WeeklyAvailabilityPlanner(now=NOW).build_public_availability(EVENT, _template(), meetings)

        assert first == second


class TestOwnerAvailability:
    """Tests for the owner-facing template view."""

    def test_empty_template_uses_default_week(self):
        result = WeeklyAvailabilityPlanner.build_owner_availability(AvailabilityTemplate(time_gap=45))

        assert result.to_dict() == {
            "timeGap": 45,
            "days": [
                {"day": day.value, "startTime": "09:00", "endTime": "17:00", "isAvailable": False}
                for day in Weekday
            ],
        }

    def test_stored_rows_are_reported_with_defaults_for_missing(self):
        result = WeeklyAvailabilityPlanner.build_owner_availability(_template()).to_dict()

        assert len(result["days"]) == 7
        assert result["days"][0]["day"] == "SUNDAY"
        assert result["days"][1] == {
            "day": "MONDAY", "startTime": "09:00", "endTime": "10:00", "isAvailable": True
        }
        assert result["days"][2]["isAvailable"] is False
        assert result["days"][2]["endTime"] == "10:00"
