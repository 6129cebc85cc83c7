"""EventAttendee repository interface."""

from abc import abstractmethod
from typing import Optional

from eventhub.core.domain.attendee import AttendanceStatus, EventAttendee

from .base import Page, PageRequest, Repository


class EventAttendeeRepository(Repository[EventAttendee]):
    """Persistence contract for event registrations."""

    @abstractmethod
    def find_by_event_and_user(self, event_id: str, user_id: str) -> Optional[EventAttendee]:
        """The registration of ``user_id`` for ``event_id``, if any."""

    @abstractmethod
    def find_by_event_id(
        self,
        event_id: str,
        status: Optional[AttendanceStatus] = None,
        page: PageRequest = PageRequest(),
    ) -> Page[EventAttendee]:
        """Registrations for an event, optionally filtered by status."""

    @abstractmethod
    def find_by_user_id(
        self,
        user_id: str,
        status: Optional[AttendanceStatus] = None,
        page: PageRequest = PageRequest(),
    ) -> Page[EventAttendee]:
        """Registrations of a user, optionally filtered by status."""

    @abstractmethod
    def count_by_event_id(self, event_id: str, status: Optional[AttendanceStatus] = None) -> int:
        """Number of registrations for an event (capacity checks)."""
