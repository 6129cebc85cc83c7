"""
Domain aggregates and value objects.

Payment, Ticket, EventAttendee, Group, GroupMember and NotificationTemplate,
each an immutable model with guarded lifecycle transitions.
"""

from eventhub.core.domain.attendee import (
    AttendanceStatus,
    AttendanceStatusEnum,
    EventAttendee,
)
from eventhub.core.domain.entity import Entity, TransitionResult
from eventhub.core.domain.group import Group, GroupStatus, GroupStatusEnum
from eventhub.core.domain.group_member import (
    GroupMember,
    GroupMemberRole,
    GroupMemberRoleEnum,
    GroupMemberStatus,
    GroupMemberStatusEnum,
)
from eventhub.core.domain.money import Money
from eventhub.core.domain.notification_template import (
    NotificationChannel,
    NotificationChannelEnum,
    NotificationTemplate,
    NotificationType,
)
from eventhub.core.domain.payment import (
    Currency,
    CurrencyEnum,
    Payment,
    PaymentMethod,
    PaymentMethodEnum,
    PaymentProvider,
    PaymentProviderEnum,
    PaymentStatus,
    PaymentStatusEnum,
)
from eventhub.core.domain.providers import (
    fixed_clock,
    random_base36,
    sequential_ids,
    utc_now,
    uuid4_str,
)
from eventhub.core.domain.rendering import render_template
from eventhub.core.domain.ticket import Ticket, TicketStatus, TicketStatusEnum
from eventhub.core.domain.value_object import EnumValueObject

__all__ = [
    # Base contracts
    "Entity",
    "EnumValueObject",
    "TransitionResult",
    # Providers
    "utc_now",
    "uuid4_str",
    "fixed_clock",
    "sequential_ids",
    "random_base36",
    # Payment
    "Payment",
    "PaymentStatus",
    "PaymentStatusEnum",
    "PaymentProvider",
    "PaymentProviderEnum",
    "Currency",
    "CurrencyEnum",
    "PaymentMethod",
    "PaymentMethodEnum",
    "Money",
    # Ticket
    "Ticket",
    "TicketStatus",
    "TicketStatusEnum",
    # Attendance
    "EventAttendee",
    "AttendanceStatus",
    "AttendanceStatusEnum",
    # Groups
    "Group",
    "GroupStatus",
    "GroupStatusEnum",
    "GroupMember",
    "GroupMemberRole",
    "GroupMemberRoleEnum",
    "GroupMemberStatus",
    "GroupMemberStatusEnum",
    # Notification templates
    "NotificationTemplate",
    "NotificationChannel",
    "NotificationChannelEnum",
    "NotificationType",
    "render_template",
]
