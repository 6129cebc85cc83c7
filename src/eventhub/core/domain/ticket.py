"""
Ticket: admission credential issued against a payment

State machine:
    VALID ──use────▶ USED
      ├──cancel──▶ CANCELLED
      └──expire──▶ EXPIRED

Every state other than VALID is terminal.
"""

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import Field, ValidationError

from eventhub.config import get_settings
from eventhub.core.errors import ErrorCode, TicketCreateException, TicketUpdateException

from .entity import Entity, TransitionResult
from .providers import Clock, IdGenerator, utc_now, uuid4_str
from .value_object import EnumValueObject, resolve_value


QR_ID_CHARS = 8


class TicketStatusEnum(str, Enum):
    """Ticket lifecycle states"""

    VALID = "VALID"
    USED = "USED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


class TicketStatus(EnumValueObject):
    """Validated ticket status."""

    label: ClassVar[str] = "ticket status"

    value: TicketStatusEnum

    @classmethod
    def valid(cls) -> "TicketStatus":
        return cls(value=TicketStatusEnum.VALID)

    @classmethod
    def used(cls) -> "TicketStatus":
        return cls(value=TicketStatusEnum.USED)

    @classmethod
    def cancelled(cls) -> "TicketStatus":
        return cls(value=TicketStatusEnum.CANCELLED)

    @classmethod
    def expired(cls) -> "TicketStatus":
        return cls(value=TicketStatusEnum.EXPIRED)

    def is_valid(self) -> bool:
        return self.value == TicketStatusEnum.VALID

    def is_used(self) -> bool:
        return self.value == TicketStatusEnum.USED

    def is_cancelled(self) -> bool:
        return self.value == TicketStatusEnum.CANCELLED

    def is_expired(self) -> bool:
        return self.value == TicketStatusEnum.EXPIRED


def default_qr_code(ticket_id: str, prefix: str | None = None) -> str:
    """``<prefix>-<first 8 chars of id>``; prefix from settings when omitted."""
    return f"{prefix or get_settings().ticket_qr_prefix}-{ticket_id[:QR_ID_CHARS]}"


class Ticket(Entity):
    """Ticket aggregate."""

    record_schema: ClassVar[str] = "ticket"

    user_id: str = Field(..., min_length=1, description="Ticket holder")
    event_id: str = Field(..., min_length=1, description="Event the ticket admits to")
    payment_id: str = Field(..., min_length=1, description="Payment the ticket was issued for")
    ticket_type: str = Field(..., min_length=1, description="Ticket tier, e.g. GENERAL or VIP")
    ticket_price: float = Field(..., ge=0, description="Price paid for this ticket")
    status: TicketStatus = Field(..., description="Lifecycle status")
    qr_code: str = Field(..., min_length=1, description="Scannable credential")
    used_at: datetime | None = Field(None, description="When the ticket was scanned")
    metadata: dict[str, Any] | None = Field(None, description="Free-form data")

    @classmethod
    def create(
        cls,
        *,
        user_id: str,
        event_id: str,
        payment_id: str,
        ticket_type: str,
        ticket_price: float,
        status: "str | TicketStatusEnum | TicketStatus | None" = None,
        qr_code: str | None = None,
        used_at: datetime | None = None,
        metadata: dict[str, Any] | None = None,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
    ) -> "Ticket":
        """
        Issue a new ticket.

        Defaults: status VALID, ``qr_code`` derived from the id.

        Raises:
            TicketCreateException: On any missing or invalid input
        """
        if not user_id:
            raise TicketCreateException("User id is required", ErrorCode.REQUIRED_FIELD)
        if not event_id:
            raise TicketCreateException("Event id is required", ErrorCode.REQUIRED_FIELD)
        if not payment_id:
            raise TicketCreateException("Payment id is required", ErrorCode.REQUIRED_FIELD)
        if not ticket_type:
            raise TicketCreateException("Ticket type is required", ErrorCode.REQUIRED_FIELD)
        if ticket_price is None or ticket_price < 0:
            raise TicketCreateException(
                "Ticket price cannot be negative", ErrorCode.INVALID_AMOUNT
            )

        resolved_status = (
            resolve_value(TicketStatus, status, TicketCreateException)
            if status is not None
            else TicketStatus.valid()
        )
        ticket_id = id or (id_generator or uuid4_str)()
        now = (clock or utc_now)()
        try:
            return cls(
                id=ticket_id,
                user_id=user_id,
                event_id=event_id,
                payment_id=payment_id,
                ticket_type=ticket_type,
                ticket_price=ticket_price,
                status=resolved_status,
                qr_code=qr_code or default_qr_code(ticket_id),
                used_at=used_at,
                metadata=metadata or None,
                created_at=created_at or now,
                updated_at=updated_at or now,
            )
        except ValidationError as e:
            raise TicketCreateException(str(e), ErrorCode.INVALID_VALUE) from e

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def try_use_ticket(self, *, clock: Clock | None = None) -> TransitionResult["Ticket"]:
        if self.status.is_used():
            return self._reject(
                "use_ticket",
                TicketUpdateException("Ticket has already been used", ErrorCode.TICKET_ALREADY_USED),
            )
        if not self.status.is_valid():
            return self._reject(
                "use_ticket",
                TicketUpdateException(
                    f"Only valid tickets can be used (status is {self.status})",
                    ErrorCode.TICKET_NOT_VALID,
                ),
            )
        now = (clock or utc_now)()
        return self._accept(
            "use_ticket",
            self._evolve(lambda: now, status=TicketStatus.used(), used_at=now),
        )

    def use_ticket(self, *, clock: Clock | None = None) -> "Ticket":
        """
        Scan the ticket at the door.

        Raises:
            TicketUpdateException: If the ticket is not VALID
        """
        return self.try_use_ticket(clock=clock).unwrap()

    def try_cancel_ticket(
        self, reason: str | None = None, *, clock: Clock | None = None
    ) -> TransitionResult["Ticket"]:
        if self.status.is_used():
            return self._reject(
                "cancel_ticket",
                TicketUpdateException(
                    "A used ticket cannot be cancelled", ErrorCode.TICKET_ALREADY_USED
                ),
            )
        if self.status.is_cancelled():
            return self._reject(
                "cancel_ticket",
                TicketUpdateException(
                    "Ticket is already cancelled", ErrorCode.TICKET_ALREADY_CANCELLED
                ),
            )
        if not self.status.is_valid():
            return self._reject(
                "cancel_ticket",
                TicketUpdateException(
                    f"Only valid tickets can be cancelled (status is {self.status})",
                    ErrorCode.TICKET_NOT_VALID,
                ),
            )
        metadata = (
            self._merged_metadata({"cancellation_reason": reason}) if reason else self.metadata
        )
        return self._accept(
            "cancel_ticket",
            self._evolve(clock, status=TicketStatus.cancelled(), metadata=metadata),
        )

    def cancel_ticket(self, reason: str | None = None, *, clock: Clock | None = None) -> "Ticket":
        """
        Cancel a valid ticket; ``reason`` goes to ``metadata["cancellation_reason"]``.

        Raises:
            TicketUpdateException: If the ticket is USED, CANCELLED or EXPIRED
        """
        return self.try_cancel_ticket(reason, clock=clock).unwrap()

    def try_expire_ticket(self, *, clock: Clock | None = None) -> TransitionResult["Ticket"]:
        if not self.status.is_valid():
            return self._reject(
                "expire_ticket",
                TicketUpdateException(
                    f"Only valid tickets can expire (status is {self.status})",
                    ErrorCode.TICKET_NOT_VALID,
                ),
            )
        return self._accept("expire_ticket", self._evolve(clock, status=TicketStatus.expired()))

    def expire_ticket(self, *, clock: Clock | None = None) -> "Ticket":
        return self.try_expire_ticket(clock=clock).unwrap()

    def update_metadata(self, patch: dict[str, Any], *, clock: Clock | None = None) -> "Ticket":
        return self._evolve(clock, metadata=self._merged_metadata(patch))
