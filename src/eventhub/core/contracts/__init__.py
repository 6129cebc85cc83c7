"""
Record Contract Validation

JSON Schema contracts for the persisted projection of every aggregate.
"""

from .validators import (
    ContractValidator,
    EventAttendeeRecordValidator,
    GroupMemberRecordValidator,
    GroupRecordValidator,
    NotificationTemplateRecordValidator,
    PaymentRecordValidator,
    SchemaLoader,
    TicketRecordValidator,
    validate_event_attendee_record,
    validate_group_member_record,
    validate_group_record,
    validate_notification_template_record,
    validate_payment_record,
    validate_ticket_record,
    validator_for,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PaymentRecordValidator",
    "TicketRecordValidator",
    "EventAttendeeRecordValidator",
    "GroupRecordValidator",
    "GroupMemberRecordValidator",
    "NotificationTemplateRecordValidator",
    # Functions
    "validator_for",
    "validate_payment_record",
    "validate_ticket_record",
    "validate_event_attendee_record",
    "validate_group_record",
    "validate_group_member_record",
    "validate_notification_template_record",
]
