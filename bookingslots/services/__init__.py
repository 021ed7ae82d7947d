"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability_service import AvailabilityRepositoryProtocol, AvailabilityService
from .schemas import AvailabilityUpdate, DayAvailabilityPayload

__all__ = [
    "AvailabilityRepositoryProtocol",
    "AvailabilityService",
    "AvailabilityUpdate",
    "DayAvailabilityPayload",
]
