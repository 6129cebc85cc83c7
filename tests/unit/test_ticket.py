"""
Tests for the Ticket aggregate

Coverage:
- create(): defaults, QR code derivation, validation
- use / cancel / expire guards (every non-VALID state is terminal)
- Settings-driven QR prefix
"""

import re

import pytest

from eventhub.core.domain import Ticket, TicketStatus
from eventhub.core.errors import ErrorCode, TicketCreateException, TicketUpdateException


@pytest.fixture
def ticket(clock, ids) -> Ticket:
    return Ticket.create(
        user_id="u1",
        event_id="e1",
        payment_id="p1",
        ticket_type="GENERAL",
        ticket_price=25.0,
        clock=clock,
        id_generator=ids,
    )


class TestTicketCreate:
    def test_defaults(self, ticket):
        assert ticket.status == TicketStatus.valid()
        assert ticket.used_at is None
        assert ticket.metadata is None

    def test_qr_code_derived_from_id(self, ticket):
        assert re.fullmatch(r"EHTICKET-.{8}", ticket.qr_code)
        assert ticket.qr_code == "EHTICKET-abcdef01"

    def test_qr_code_for_uuid_ids(self):
        ticket = Ticket.create(
            user_id="u1", event_id="e1", payment_id="p1", ticket_type="VIP", ticket_price=0
        )
        assert re.fullmatch(r"^EHTICKET-.{8}$", ticket.qr_code)
        assert ticket.qr_code.endswith(ticket.id[:8])

    def test_explicit_qr_code_kept(self):
        ticket = Ticket.create(
            user_id="u1",
            event_id="e1",
            payment_id="p1",
            ticket_type="VIP",
            ticket_price=0,
            qr_code="CUSTOM-1",
        )
        assert ticket.qr_code == "CUSTOM-1"

    def test_qr_prefix_from_settings(self, monkeypatch):
        from eventhub.config import get_settings

        monkeypatch.setenv("EVENTHUB_TICKET_QR_PREFIX", "FEST")
        get_settings.cache_clear()
        ticket = Ticket.create(
            id="12345678-aaaa",
            user_id="u1",
            event_id="e1",
            payment_id="p1",
            ticket_type="VIP",
            ticket_price=0,
        )
        assert ticket.qr_code == "FEST-12345678"

    def test_free_ticket_allowed(self):
        ticket = Ticket.create(
            user_id="u1", event_id="e1", payment_id="p1", ticket_type="FREE", ticket_price=0
        )
        assert ticket.ticket_price == 0

    def test_negative_price_rejected(self):
        with pytest.raises(TicketCreateException) as exc_info:
            Ticket.create(
                user_id="u1", event_id="e1", payment_id="p1", ticket_type="VIP", ticket_price=-1
            )
        assert exc_info.value.code == ErrorCode.INVALID_AMOUNT

    @pytest.mark.parametrize("missing", ["user_id", "event_id", "payment_id", "ticket_type"])
    def test_required_fields(self, missing):
        props = dict(
            user_id="u1", event_id="e1", payment_id="p1", ticket_type="VIP", ticket_price=10
        )
        props[missing] = ""
        with pytest.raises(TicketCreateException):
            Ticket.create(**props)

    def test_invalid_status_rejected(self):
        with pytest.raises(TicketCreateException) as exc_info:
            Ticket.create(
                user_id="u1",
                event_id="e1",
                payment_id="p1",
                ticket_type="VIP",
                ticket_price=10,
                status="LOST",
            )
        assert exc_info.value.code == ErrorCode.INVALID_VALUE


class TestTicketLifecycle:
    def test_use_ticket(self, ticket, later, t1):
        used = ticket.use_ticket(clock=later)
        assert used.status.is_used()
        assert used.used_at == t1
        assert used.updated_at == t1
        assert ticket.status.is_valid()

    def test_second_use_rejected(self, ticket):
        used = ticket.use_ticket()
        with pytest.raises(TicketUpdateException) as exc_info:
            used.use_ticket()
        assert exc_info.value.code == ErrorCode.TICKET_ALREADY_USED

    @pytest.mark.parametrize("transition", ["cancel_ticket", "expire_ticket"])
    def test_use_after_terminal_state_rejected(self, ticket, transition):
        terminal = getattr(ticket, transition)()
        with pytest.raises(TicketUpdateException) as exc_info:
            terminal.use_ticket()
        assert exc_info.value.code == ErrorCode.TICKET_NOT_VALID

    def test_cancel_with_reason(self, ticket):
        cancelled = ticket.cancel_ticket("event moved")
        assert cancelled.status.is_cancelled()
        assert cancelled.metadata == {"cancellation_reason": "event moved"}

    def test_cancel_without_reason(self, ticket):
        assert ticket.cancel_ticket().metadata is None

    def test_cancel_used_rejected(self, ticket):
        with pytest.raises(TicketUpdateException) as exc_info:
            ticket.use_ticket().cancel_ticket()
        assert exc_info.value.code == ErrorCode.TICKET_ALREADY_USED

    def test_cancel_twice_rejected(self, ticket):
        with pytest.raises(TicketUpdateException) as exc_info:
            ticket.cancel_ticket().cancel_ticket()
        assert exc_info.value.code == ErrorCode.TICKET_ALREADY_CANCELLED

    def test_cancel_expired_rejected(self, ticket):
        result = ticket.expire_ticket().try_cancel_ticket()
        assert not result.ok
        assert result.error.code == ErrorCode.TICKET_NOT_VALID

    def test_expire_only_valid(self, ticket):
        assert ticket.expire_ticket().status.is_expired()
        with pytest.raises(TicketUpdateException):
            ticket.use_ticket().expire_ticket()

    def test_update_metadata(self, ticket):
        assert ticket.update_metadata({"seat": "A1"}).metadata == {"seat": "A1"}

    def test_reconstitute_round_trip(self, ticket):
        used = ticket.use_ticket()
        assert Ticket.reconstitute(**used.to_object()) == used
