"""
Domain exceptions for the EventHub core.

Every invalid construction or illegal transition raises a typed exception
carrying a human-readable message and a machine-readable code. The
application layer maps these to user-facing errors; nothing inside the core
recovers from them.

Hierarchy:
- DomainException
  - <Aggregate>CreateException: invalid input to ``create``
  - <Aggregate>UpdateException: illegal transition or invalid update
"""

from enum import Enum


# =============================================================================
# ERROR CODES
# =============================================================================


class ErrorCode(str, Enum):
    """Machine-readable error codes carried by domain exceptions."""

    DOMAIN_ERROR = "DOMAIN_ERROR"

    # Generic create/update fallbacks
    PAYMENT_CREATE_ERROR = "PAYMENT_CREATE_ERROR"
    PAYMENT_UPDATE_ERROR = "PAYMENT_UPDATE_ERROR"
    TICKET_CREATE_ERROR = "TICKET_CREATE_ERROR"
    TICKET_UPDATE_ERROR = "TICKET_UPDATE_ERROR"
    EVENT_ATTENDEE_CREATE_ERROR = "EVENT_ATTENDEE_CREATE_ERROR"
    EVENT_ATTENDEE_UPDATE_ERROR = "EVENT_ATTENDEE_UPDATE_ERROR"
    GROUP_CREATE_ERROR = "GROUP_CREATE_ERROR"
    GROUP_UPDATE_ERROR = "GROUP_UPDATE_ERROR"
    GROUP_MEMBER_CREATE_ERROR = "GROUP_MEMBER_CREATE_ERROR"
    GROUP_MEMBER_UPDATE_ERROR = "GROUP_MEMBER_UPDATE_ERROR"
    NOTIFICATION_TEMPLATE_CREATE_ERROR = "NOTIFICATION_TEMPLATE_CREATE_ERROR"
    NOTIFICATION_TEMPLATE_UPDATE_ERROR = "NOTIFICATION_TEMPLATE_UPDATE_ERROR"

    # Input validation
    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_VALUE = "INVALID_VALUE"

    # Payment guards
    PAYMENT_NOT_PENDING = "PAYMENT_NOT_PENDING"
    PAYMENT_NOT_COMPLETED = "PAYMENT_NOT_COMPLETED"

    # Ticket guards
    TICKET_ALREADY_USED = "TICKET_ALREADY_USED"
    TICKET_ALREADY_CANCELLED = "TICKET_ALREADY_CANCELLED"
    TICKET_NOT_VALID = "TICKET_NOT_VALID"

    # Attendance guards
    ATTENDEE_ALREADY_CHECKED_IN = "ATTENDEE_ALREADY_CHECKED_IN"
    ATTENDEE_NOT_ELIGIBLE = "ATTENDEE_NOT_ELIGIBLE"
    ATTENDEE_TICKET_ALREADY_ASSIGNED = "ATTENDEE_TICKET_ALREADY_ASSIGNED"

    # Group guards
    GROUP_CLOSED = "GROUP_CLOSED"

    # Group member guards
    MEMBER_NOT_PENDING = "MEMBER_NOT_PENDING"
    MEMBER_NOT_ACTIVE = "MEMBER_NOT_ACTIVE"
    MEMBER_NOT_INACTIVE = "MEMBER_NOT_INACTIVE"

    # Notification template guards
    HTML_TEMPLATE_REQUIRED = "HTML_TEMPLATE_REQUIRED"


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class DomainException(Exception):
    """
    Base class for all domain errors.

    Attributes:
        message: Human-readable description of the failure
        code: Machine-readable error code
    """

    default_code: ErrorCode = ErrorCode.DOMAIN_ERROR

    def __init__(self, message: str, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, code={self.code.value!r})"


# =============================================================================
# AGGREGATE EXCEPTIONS
# =============================================================================


class PaymentCreateException(DomainException):
    default_code = ErrorCode.PAYMENT_CREATE_ERROR


class PaymentUpdateException(DomainException):
    default_code = ErrorCode.PAYMENT_UPDATE_ERROR


class TicketCreateException(DomainException):
    default_code = ErrorCode.TICKET_CREATE_ERROR


class TicketUpdateException(DomainException):
    default_code = ErrorCode.TICKET_UPDATE_ERROR


class EventAttendeeCreateException(DomainException):
    default_code = ErrorCode.EVENT_ATTENDEE_CREATE_ERROR


class EventAttendeeUpdateException(DomainException):
    default_code = ErrorCode.EVENT_ATTENDEE_UPDATE_ERROR


class GroupCreateException(DomainException):
    default_code = ErrorCode.GROUP_CREATE_ERROR


class GroupUpdateException(DomainException):
    default_code = ErrorCode.GROUP_UPDATE_ERROR


class GroupMemberCreateException(DomainException):
    default_code = ErrorCode.GROUP_MEMBER_CREATE_ERROR


class GroupMemberUpdateException(DomainException):
    default_code = ErrorCode.GROUP_MEMBER_UPDATE_ERROR


class NotificationTemplateCreateException(DomainException):
    default_code = ErrorCode.NOTIFICATION_TEMPLATE_CREATE_ERROR


class NotificationTemplateUpdateException(DomainException):
    default_code = ErrorCode.NOTIFICATION_TEMPLATE_UPDATE_ERROR
