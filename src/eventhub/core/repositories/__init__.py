"""
Repository interfaces.

Abstract persistence contracts consumed by the application layer. The core
defines them and never implements them.
"""

from .attendee_repository import EventAttendeeRepository
from .base import Page, PageRequest, Repository
from .group_repository import GroupMemberRepository, GroupRepository
from .notification_template_repository import NotificationTemplateRepository
from .payment_repository import PaymentRepository, TicketRepository

__all__ = [
    "Page",
    "PageRequest",
    "Repository",
    "PaymentRepository",
    "TicketRepository",
    "EventAttendeeRepository",
    "GroupRepository",
    "GroupMemberRepository",
    "NotificationTemplateRepository",
]
