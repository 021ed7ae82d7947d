"""
Adapters layer - Persistence for availability templates, events and meetings.
"""

from .memory_repository import InMemoryAvailabilityRepository, MeetingRecord

__all__ = ["InMemoryAvailabilityRepository", "MeetingRecord"]
