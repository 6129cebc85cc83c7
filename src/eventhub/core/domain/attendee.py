"""
EventAttendee: a user's registration for an event

Check-in and ticket assignment are only possible while the registration is
REGISTERED or CONFIRMED. Once checked in, the registration can no longer be
cancelled.
"""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import Field, ValidationError

from eventhub.core.errors import (
    ErrorCode,
    EventAttendeeCreateException,
    EventAttendeeUpdateException,
)

from .entity import Entity, TransitionResult
from .providers import Clock, IdGenerator, utc_now, uuid4_str
from .value_object import EnumValueObject, resolve_value


class AttendanceStatusEnum(str, Enum):
    """Registration states"""

    REGISTERED = "REGISTERED"
    CONFIRMED = "CONFIRMED"
    WAITLISTED = "WAITLISTED"
    CANCELLED = "CANCELLED"
    ATTENDED = "ATTENDED"
    NO_SHOW = "NO_SHOW"


CHECK_IN_ELIGIBLE: frozenset[AttendanceStatusEnum] = frozenset(
    {AttendanceStatusEnum.REGISTERED, AttendanceStatusEnum.CONFIRMED}
)


class AttendanceStatus(EnumValueObject):
    """Validated registration status."""

    label: ClassVar[str] = "attendance status"

    value: AttendanceStatusEnum

    @classmethod
    def registered(cls) -> "AttendanceStatus":
        return cls(value=AttendanceStatusEnum.REGISTERED)

    @classmethod
    def confirmed(cls) -> "AttendanceStatus":
        return cls(value=AttendanceStatusEnum.CONFIRMED)

    @classmethod
    def waitlisted(cls) -> "AttendanceStatus":
        return cls(value=AttendanceStatusEnum.WAITLISTED)

    @classmethod
    def cancelled(cls) -> "AttendanceStatus":
        return cls(value=AttendanceStatusEnum.CANCELLED)

    @classmethod
    def attended(cls) -> "AttendanceStatus":
        return cls(value=AttendanceStatusEnum.ATTENDED)

    @classmethod
    def no_show(cls) -> "AttendanceStatus":
        return cls(value=AttendanceStatusEnum.NO_SHOW)

    def is_registered(self) -> bool:
        return self.value == AttendanceStatusEnum.REGISTERED

    def is_confirmed(self) -> bool:
        return self.value == AttendanceStatusEnum.CONFIRMED

    def is_waitlisted(self) -> bool:
        return self.value == AttendanceStatusEnum.WAITLISTED

    def is_cancelled(self) -> bool:
        return self.value == AttendanceStatusEnum.CANCELLED

    def is_attended(self) -> bool:
        return self.value == AttendanceStatusEnum.ATTENDED

    def is_no_show(self) -> bool:
        return self.value == AttendanceStatusEnum.NO_SHOW

    def allows_check_in(self) -> bool:
        return self.value in CHECK_IN_ELIGIBLE


class EventAttendee(Entity):
    """Event registration aggregate."""

    record_schema: ClassVar[str] = "event_attendee"

    event_id: str = Field(..., min_length=1, description="Event")
    user_id: str = Field(..., min_length=1, description="Registered user")
    status: AttendanceStatus = Field(..., description="Registration status")
    registration_date: datetime = Field(..., description="When the user registered")
    checked_in: bool = Field(default=False, description="Whether the user was checked in")
    checked_in_date: datetime | None = Field(None, description="Check-in time")
    ticket_id: str | None = Field(None, description="Assigned ticket")
    notes: str | None = Field(None, description="Newline-separated organizer notes")

    @classmethod
    def create(
        cls,
        *,
        event_id: str,
        user_id: str,
        status: "str | AttendanceStatusEnum | AttendanceStatus | None" = None,
        registration_date: datetime | None = None,
        checked_in: bool = False,
        checked_in_date: datetime | None = None,
        ticket_id: str | None = None,
        notes: str | None = None,
        is_active: bool = True,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
    ) -> "EventAttendee":
        """
        Register a user for an event.

        Raises:
            EventAttendeeCreateException: If ids are missing or status is unknown
        """
        if not event_id:
            raise EventAttendeeCreateException("Event id is required", ErrorCode.REQUIRED_FIELD)
        if not user_id:
            raise EventAttendeeCreateException("User id is required", ErrorCode.REQUIRED_FIELD)

        resolved_status = (
            resolve_value(AttendanceStatus, status, EventAttendeeCreateException)
            if status is not None
            else AttendanceStatus.registered()
        )
        now = (clock or utc_now)()
        try:
            return cls(
                id=id or (id_generator or uuid4_str)(),
                event_id=event_id,
                user_id=user_id,
                status=resolved_status,
                registration_date=registration_date or now,
                checked_in=checked_in,
                checked_in_date=checked_in_date,
                ticket_id=ticket_id or None,
                notes=notes or None,
                is_active=is_active,
                created_at=created_at or now,
                updated_at=updated_at or now,
            )
        except ValidationError as e:
            raise EventAttendeeCreateException(str(e), ErrorCode.INVALID_VALUE) from e

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def try_check_in(self, *, clock: Clock | None = None) -> TransitionResult["EventAttendee"]:
        if self.checked_in:
            return self._reject(
                "check_in",
                EventAttendeeUpdateException(
                    "Attendee has already checked in", ErrorCode.ATTENDEE_ALREADY_CHECKED_IN
                ),
            )
        if not self.status.allows_check_in():
            return self._reject(
                "check_in",
                EventAttendeeUpdateException(
                    f"Cannot check in a registration that is {self.status}",
                    ErrorCode.ATTENDEE_NOT_ELIGIBLE,
                ),
            )
        now = (clock or utc_now)()
        return self._accept(
            "check_in",
            self._evolve(
                lambda: now,
                checked_in=True,
                checked_in_date=now,
                status=AttendanceStatus.attended(),
            ),
        )

    def check_in(self, *, clock: Clock | None = None) -> "EventAttendee":
        """
        Check the attendee in; status becomes ATTENDED.

        Raises:
            EventAttendeeUpdateException: If already checked in or not REGISTERED/CONFIRMED
        """
        return self.try_check_in(clock=clock).unwrap()

    def change_status(
        self,
        status: "str | AttendanceStatusEnum | AttendanceStatus",
        *,
        clock: Clock | None = None,
    ) -> "EventAttendee":
        """
        Set an arbitrary status. Returns ``self`` when the status is unchanged.

        Raises:
            EventAttendeeUpdateException: If ``status`` is not a known value
        """
        new_status = resolve_value(AttendanceStatus, status, EventAttendeeUpdateException)
        if self.status.equals(new_status):
            return self
        return self._evolve(clock, status=new_status)

    def try_assign_ticket(
        self, ticket_id: str, *, clock: Clock | None = None
    ) -> TransitionResult["EventAttendee"]:
        if self.ticket_id:
            return self._reject(
                "assign_ticket",
                EventAttendeeUpdateException(
                    "A ticket is already assigned to this registration",
                    ErrorCode.ATTENDEE_TICKET_ALREADY_ASSIGNED,
                ),
            )
        if not self.status.allows_check_in():
            return self._reject(
                "assign_ticket",
                EventAttendeeUpdateException(
                    f"Cannot assign a ticket to a registration that is {self.status}",
                    ErrorCode.ATTENDEE_NOT_ELIGIBLE,
                ),
            )
        if not ticket_id:
            return self._reject(
                "assign_ticket",
                EventAttendeeUpdateException("Ticket id is required", ErrorCode.REQUIRED_FIELD),
            )
        return self._accept("assign_ticket", self._evolve(clock, ticket_id=ticket_id))

    def assign_ticket(self, ticket_id: str, *, clock: Clock | None = None) -> "EventAttendee":
        """
        Raises:
            EventAttendeeUpdateException: If a ticket is already assigned or status is not eligible
        """
        return self.try_assign_ticket(ticket_id, clock=clock).unwrap()

    def try_add_notes(
        self, notes: str, *, clock: Clock | None = None
    ) -> TransitionResult["EventAttendee"]:
        if not notes or not notes.strip():
            return self._reject(
                "add_notes",
                EventAttendeeUpdateException("Notes cannot be empty", ErrorCode.REQUIRED_FIELD),
            )
        combined = f"{self.notes}\n{notes}" if self.notes else notes
        return self._accept("add_notes", self._evolve(clock, notes=combined))

    def add_notes(self, notes: str, *, clock: Clock | None = None) -> "EventAttendee":
        """Append ``notes`` on a new line."""
        return self.try_add_notes(notes, clock=clock).unwrap()

    def try_cancel(self, *, clock: Clock | None = None) -> TransitionResult["EventAttendee"]:
        if self.status.is_cancelled():
            return self._unchanged("cancel")
        if self.checked_in:
            return self._reject(
                "cancel",
                EventAttendeeUpdateException(
                    "A checked-in registration cannot be cancelled",
                    ErrorCode.ATTENDEE_ALREADY_CHECKED_IN,
                ),
            )
        return self._accept("cancel", self._evolve(clock, status=AttendanceStatus.cancelled()))

    def cancel(self, *, clock: Clock | None = None) -> "EventAttendee":
        """
        Cancel the registration. Returns ``self`` if already CANCELLED.

        Raises:
            EventAttendeeUpdateException: If the attendee has checked in
        """
        return self.try_cancel(clock=clock).unwrap()
