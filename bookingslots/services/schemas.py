"""
Payload validation for availability updates using Pydantic.
"""

from datetime import time
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..domain.exceptions import InvalidInputError
from ..domain.models import AvailabilityTemplate, Weekday, WeekdayTemplate, parse_time_of_day


class DayAvailabilityPayload(BaseModel):
    """One weekday row of an availability update."""
    model_config = ConfigDict(populate_by_name=True)

    day: Weekday
    start_time: time = Field(alias="startTime")
    end_time: time = Field(alias="endTime")
    is_available: bool = Field(alias="isAvailable")

    @field_validator("day", mode="before")
    @classmethod
    def validate_day(cls, value: Any) -> Weekday:
        """Accept weekday names in any case."""
        try:
            return Weekday.parse(value)
        except InvalidInputError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def validate_time(cls, value: Any) -> time:
        """Times of day must be given as HH:mm."""
        try:
            return parse_time_of_day(value)
        except InvalidInputError as exc:
            raise ValueError(str(exc)) from exc

    def to_template(self) -> WeekdayTemplate:
        return WeekdayTemplate(
            day=self.day,
            start_time=self.start_time,
            end_time=self.end_time,
            is_available=self.is_available,
        )


class AvailabilityUpdate(BaseModel):
    """Replace-all update of a user's weekly availability."""
    model_config = ConfigDict(populate_by_name=True)

    time_gap: int = Field(default=30, alias="timeGap")
    days: List[DayAvailabilityPayload] = Field(default_factory=list)

    @field_validator("time_gap")
    @classmethod
    def validate_time_gap(cls, value: int) -> int:
        """Ensure the gap between slots is positive."""
        if value <= 0:
            raise ValueError("timeGap must be greater than zero")
        return value

    @field_validator("days")
    @classmethod
    def validate_unique_days(cls, value: List[DayAvailabilityPayload]) -> List[DayAvailabilityPayload]:
        """Each weekday may appear at most once."""
        seen: set[Weekday] = set()
        for entry in value:
            if entry.day in seen:
                raise ValueError(f"Duplicate weekday detected: {entry.day.value}")
            seen.add(entry.day)
        return value

    @classmethod
    def from_payload(cls, data: Dict[str, Any], default_time_gap: int = 30) -> "AvailabilityUpdate":
        """
        Validate a raw payload mapping.

        Args:
            data: Raw payload with ``timeGap`` and ``days``
            default_time_gap: Gap used when the payload has no ``timeGap``

        Raises:
            InvalidInputError: If the payload does not validate
        """
        if not isinstance(data, dict):
            raise InvalidInputError("Availability payload must be a mapping.")
        if "timeGap" not in data and "time_gap" not in data:
            data = dict(data, timeGap=default_time_gap)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise InvalidInputError(f"Invalid availability payload: {exc}") from exc

    def to_template(self) -> AvailabilityTemplate:
        return AvailabilityTemplate.from_days(
            [entry.to_template() for entry in self.days],
            time_gap=self.time_gap,
        )
