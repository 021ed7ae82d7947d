"""
Application services for availability lookups and updates.

The service awaits the repository once per request, captures the current
moment, and hands plain records to the domain-level planner. The repository
is described by a protocol so tests can plug in a stub.
"""

from __future__ import annotations

import logging
from datetime import time
from typing import Callable, List, Optional, Protocol

import pendulum
from pendulum import DateTime

from ..domain.exceptions import NotFoundError
from ..domain.models import (
    AvailabilityTemplate,
    Event,
    Meeting,
    OwnerAvailability,
    WeekdayAvailability,
)
from ..domain.occurrence_finder import DEFAULT_OCCURRENCES
from ..domain.planner import DEFAULT_WINDOW_END, DEFAULT_WINDOW_START, WeeklyAvailabilityPlanner
from .schemas import AvailabilityUpdate

logger = logging.getLogger(__name__)


class AvailabilityRepositoryProtocol(Protocol):
    """Protocol describing the persistence behaviour needed by the service."""

    async def user_exists(self, user_id: str) -> bool:
        """Return whether the user is known."""

    async def get_availability(self, user_id: str) -> Optional[AvailabilityTemplate]:
        """Return the user's weekly template, or None."""

    async def get_public_event(self, event_id: str) -> Optional[Event]:
        """Return the event if it exists and is public."""

    async def get_blocking_meetings(self, user_id: str) -> List[Meeting]:
        """Return the user's meetings that still block slots."""

    async def replace_availability(self, user_id: str, template: AvailabilityTemplate) -> None:
        """Replace every weekday row and the time gap of the user's template."""


class AvailabilityService:
    """
    Orchestrates repository access and availability planning.
    """

    def __init__(
        self,
        repository: AvailabilityRepositoryProtocol,
        timezone: str = "UTC",
        lookahead_weeks: int = DEFAULT_OCCURRENCES,
        default_start: time = DEFAULT_WINDOW_START,
        default_end: time = DEFAULT_WINDOW_END,
        clock: Callable[[str], DateTime] = pendulum.now,
    ) -> None:
        self._repository = repository
        self._timezone = timezone
        self._lookahead_weeks = lookahead_weeks
        self._default_start = default_start
        self._default_end = default_end
        self._clock = clock

    async def get_user_availability(self, user_id: str) -> OwnerAvailability:
        """
        Return the owner's weekly template with all seven days present.

        Raises:
            NotFoundError: If the user or their template does not exist
        """
        template = await self._repository.get_availability(user_id)
        if template is None:
            raise NotFoundError(f"User not found or availability missing: {user_id}")

        if not template.has_days():
            logger.debug("No weekday rows stored for %s, using default week", user_id)

        return WeeklyAvailabilityPlanner.build_owner_availability(
            template,
            default_start=self._default_start,
            default_end=self._default_end,
        )

    async def update_availability(
        self,
        user_id: str,
        payload: AvailabilityUpdate,
    ) -> AvailabilityTemplate:
        """
        Replace the user's weekday rows and time gap with the payload.

        Raises:
            NotFoundError: If the user does not exist
        """
        if not await self._repository.user_exists(user_id):
            raise NotFoundError(f"User not found: {user_id}")

        template = payload.to_template()
        await self._repository.replace_availability(user_id, template)
        logger.info(
            "Replaced availability for %s: %d day(s), gap %d min",
            user_id,
            len(template.days),
            template.time_gap,
        )
        return template

    async def get_public_availability(
        self,
        event_id: str,
        now: Optional[DateTime] = None,
    ) -> List[WeekdayAvailability]:
        """
        Compute the guest-facing availability of a public event.

        Unknown or private events and users without a template yield an
        empty list rather than an error.
        """
        event = await self._repository.get_public_event(event_id)
        if event is None:
            logger.debug("Event %s not found or private", event_id)
            return []

        template = await self._repository.get_availability(event.user_id)
        if template is None:
            logger.debug("User %s has no availability template", event.user_id)
            return []

        meetings = await self._repository.get_blocking_meetings(event.user_id)

        if now is not None:
            current = pendulum.instance(now).in_timezone(self._timezone)
        else:
            current = self._clock(self._timezone)
        planner = WeeklyAvailabilityPlanner(now=current, lookahead_weeks=self._lookahead_weeks)
        return planner.build_public_availability(event, template, meetings)
