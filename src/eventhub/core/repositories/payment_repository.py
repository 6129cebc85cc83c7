"""Payment and ticket repository interfaces."""

from abc import abstractmethod
from typing import List, Optional

from eventhub.core.domain.payment import Payment, PaymentStatus
from eventhub.core.domain.ticket import Ticket, TicketStatus

from .base import Page, PageRequest, Repository


class PaymentRepository(Repository[Payment]):
    """Persistence contract for payments."""

    @abstractmethod
    def find_by_provider_payment_id(self, provider_payment_id: str) -> Optional[Payment]:
        """Look up a payment by the provider's identifier (webhook callbacks)."""

    @abstractmethod
    def find_by_user_id(
        self,
        user_id: str,
        status: Optional[PaymentStatus] = None,
        page: PageRequest = PageRequest(),
    ) -> Page[Payment]:
        """Payments of a user, optionally filtered by status."""

    @abstractmethod
    def find_by_event_id(
        self,
        event_id: str,
        status: Optional[PaymentStatus] = None,
        page: PageRequest = PageRequest(),
    ) -> Page[Payment]:
        """Payments made for an event, optionally filtered by status."""


class TicketRepository(Repository[Ticket]):
    """Persistence contract for tickets."""

    @abstractmethod
    def find_by_qr_code(self, qr_code: str) -> Optional[Ticket]:
        """Ticket scanned at the door."""

    @abstractmethod
    def find_by_payment_id(self, payment_id: str) -> List[Ticket]:
        """Tickets issued for one payment."""

    @abstractmethod
    def find_by_user_id(
        self,
        user_id: str,
        status: Optional[TicketStatus] = None,
        page: PageRequest = PageRequest(),
    ) -> Page[Ticket]:
        """Tickets held by a user, optionally filtered by status."""

    @abstractmethod
    def find_by_event_id(
        self,
        event_id: str,
        status: Optional[TicketStatus] = None,
        page: PageRequest = PageRequest(),
    ) -> Page[Ticket]:
        """Tickets issued for an event, optionally filtered by status."""
