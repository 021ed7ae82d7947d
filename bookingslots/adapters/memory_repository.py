"""
In-memory availability repository backed by an optional YAML/JSON data file.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import pendulum
import yaml

from ..domain.exceptions import DataFileError, InvalidInputError
from ..domain.models import AvailabilityTemplate, Event, Meeting
from ..services.schemas import AvailabilityUpdate

logger = logging.getLogger(__name__)

SCHEDULED = "SCHEDULED"
CANCELLED = "CANCELLED"


@dataclass
class MeetingRecord:
    """A stored meeting together with its owner and booking status."""
    user_id: str
    meeting: Meeting
    status: str = SCHEDULED


class InMemoryAvailabilityRepository:
    """
    Repository that keeps users, events and meetings in plain dictionaries.

    Cancelled meetings are stored but never returned as blocking, so the
    slot engine only sees bookings that should count.
    """

    def __init__(
        self,
        availability: Optional[Dict[str, Optional[AvailabilityTemplate]]] = None,
        events: Optional[List[Event]] = None,
        meetings: Optional[List[MeetingRecord]] = None,
    ):
        self._availability: Dict[str, Optional[AvailabilityTemplate]] = dict(availability or {})
        self._events: Dict[str, Event] = {event.id: event for event in events or []}
        self._meetings: List[MeetingRecord] = list(meetings or [])

    async def user_exists(self, user_id: str) -> bool:
        return user_id in self._availability

    async def get_availability(self, user_id: str) -> Optional[AvailabilityTemplate]:
        return self._availability.get(user_id)

    async def get_public_event(self, event_id: str) -> Optional[Event]:
        event = self._events.get(event_id)
        if event is None or event.is_private:
            return None
        return event

    async def get_blocking_meetings(self, user_id: str) -> List[Meeting]:
        return [
            record.meeting for record in self._meetings
            if record.user_id == user_id and record.status != CANCELLED
        ]

    async def replace_availability(self, user_id: str, template: AvailabilityTemplate) -> None:
        self._availability[user_id] = template

    @classmethod
    def from_file(
        cls,
        data_path: Path,
        timezone: str = "UTC",
        default_time_gap: int = 30,
    ) -> "InMemoryAvailabilityRepository":
        """
        Load repository contents from a YAML (or JSON) data file.

        Args:
            data_path: Path to the data file
            timezone: Timezone for meeting timestamps without a UTC offset
            default_time_gap: Gap for stored availability without ``timeGap``

        Returns:
            Populated repository

        Raises:
            FileNotFoundError: If the data file doesn't exist
            DataFileError: If the file content is malformed
        """
        if not data_path.exists():
            raise FileNotFoundError(f"Data file not found: {data_path}")

        try:
            with open(data_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise DataFileError(f"Invalid YAML in {data_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise DataFileError("Data file must contain a mapping at the root level.")

        try:
            availability = {
                str(user_id): cls._parse_availability(user_data, default_time_gap)
                for user_id, user_data in (data.get("users") or {}).items()
            }
            events = [cls._parse_event(raw) for raw in data.get("events") or []]
            meetings = [cls._parse_meeting(raw, timezone) for raw in data.get("meetings") or []]
        except (AttributeError, KeyError, TypeError, ValueError, InvalidInputError) as exc:
            raise DataFileError(f"Malformed record in {data_path}: {exc}") from exc

        logger.debug(
            "Loaded %d user(s), %d event(s), %d meeting(s) from %s",
            len(availability),
            len(events),
            len(meetings),
            data_path,
        )
        return cls(availability=availability, events=events, meetings=meetings)

    def save(self, data_path: Path) -> None:
        """Write the repository contents back to a YAML data file."""
        data = {
            "users": {
                user_id: {"availability": self._dump_availability(template)}
                for user_id, template in self._availability.items()
            },
            "events": [
                {
                    "id": event.id,
                    "userId": event.user_id,
                    "duration": event.duration,
                    "isPrivate": event.is_private,
                }
                for event in self._events.values()
            ],
            "meetings": [
                {
                    "id": record.meeting.id,
                    "userId": record.user_id,
                    "eventId": record.meeting.event_id,
                    "startTime": record.meeting.start.to_iso8601_string(),
                    "endTime": record.meeting.end.to_iso8601_string(),
                    "status": record.status,
                }
                for record in self._meetings
            ],
        }

        with open(data_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)

    @staticmethod
    def _parse_availability(
        user_data: Optional[Dict[str, Any]],
        default_time_gap: int,
    ) -> Optional[AvailabilityTemplate]:
        raw = (user_data or {}).get("availability")
        if raw is None:
            return None
        return AvailabilityUpdate.from_payload(raw, default_time_gap).to_template()

    @staticmethod
    def _dump_availability(template: Optional[AvailabilityTemplate]) -> Optional[Dict[str, Any]]:
        if template is None:
            return None
        return {
            "timeGap": template.time_gap,
            "days": [day.to_dict() for day in template.days.values()],
        }

    @staticmethod
    def _parse_event(raw: Dict[str, Any]) -> Event:
        duration = int(raw["duration"])
        if duration <= 0:
            raise ValueError(f"Event {raw['id']} must have a positive duration")
        return Event(
            id=str(raw["id"]),
            duration=duration,
            user_id=str(raw["userId"]),
            is_private=bool(raw.get("isPrivate", False)),
        )

    @staticmethod
    def _parse_meeting(raw: Dict[str, Any], timezone: str) -> MeetingRecord:
        # Timestamps without an offset are wall-clock times in `timezone`
        start = pendulum.parse(str(raw["startTime"]), tz=timezone)
        end = pendulum.parse(str(raw["endTime"]), tz=timezone)
        return MeetingRecord(
            user_id=str(raw["userId"]),
            meeting=Meeting(
                start=start,
                end=end,
                id=raw.get("id"),
                event_id=raw.get("eventId"),
            ),
            status=str(raw.get("status", SCHEDULED)).upper(),
        )
