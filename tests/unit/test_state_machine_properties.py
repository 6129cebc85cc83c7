"""
Property tests for the aggregate state machines

Random inputs and random transition sequences check the quantified rules:
- Group.can_add_member admission rule
- Payment and Ticket terminal states never move again
- reconstitute(to_object()) is the identity
- Rendering of missing paths and token-free text
"""

import string

from hypothesis import given, settings, strategies as st

from eventhub.core.domain import (
    CurrencyEnum,
    Group,
    Payment,
    PaymentProviderEnum,
    Ticket,
    render_template,
)
from eventhub.core.errors import DomainException

PAYMENT_TRANSITIONS = ["complete", "fail", "refund", "cancel"]
TICKET_TRANSITIONS = ["use", "cancel", "expire"]


def _payment(amount: float = 10.0, currency: str = "USD", provider: str = "STRIPE") -> Payment:
    return Payment.create(
        user_id="u1", event_id="e1", amount=amount, currency=currency, provider=provider
    )


def _apply_payment(payment: Payment, name: str):
    if name == "complete":
        return payment.try_complete_payment("pi_x")
    if name == "fail":
        return payment.try_fail_payment({"code": "x"})
    if name == "refund":
        return payment.try_refund_payment("r")
    return payment.try_cancel_payment()


def _apply_ticket(ticket: Ticket, name: str):
    if name == "use":
        return ticket.try_use_ticket()
    if name == "cancel":
        return ticket.try_cancel_ticket("r")
    return ticket.try_expire_ticket()


# =============================================================================
# GROUP ADMISSION
# =============================================================================


@given(
    count=st.integers(min_value=0, max_value=10_000),
    max_members=st.one_of(st.none(), st.integers(min_value=1, max_value=500)),
    state=st.sampled_from(["active", "inactive", "closed"]),
)
@settings(max_examples=200)
def test_can_add_member_rule(count, max_members, state):
    group = Group.create(name="g", event_id="e1", created_by_id="u1", max_members=max_members)
    if state == "inactive":
        group = group.deactivate()
    elif state == "closed":
        group = group.close()

    if state != "active":
        assert group.can_add_member(count) is False
    elif max_members is None:
        assert group.can_add_member(count) is True
    else:
        assert group.can_add_member(count) is (count < max_members)


# =============================================================================
# TERMINAL STATES
# =============================================================================


@given(steps=st.lists(st.sampled_from(PAYMENT_TRANSITIONS), min_size=1, max_size=8))
@settings(max_examples=150)
def test_payment_terminal_states_are_final(steps):
    payment = _payment()
    for name in steps:
        before = payment.status
        result = _apply_payment(payment, name)
        if before.is_terminal():
            assert not result.ok
            assert isinstance(result.error, DomainException)
        if result.ok:
            payment = result.entity
        else:
            assert payment.status == before


@given(steps=st.lists(st.sampled_from(PAYMENT_TRANSITIONS), min_size=1, max_size=8))
@settings(max_examples=100)
def test_refund_only_after_completion(steps):
    payment = _payment()
    seen_completed = False
    for name in steps:
        seen_completed = seen_completed or payment.status.is_completed()
        result = _apply_payment(payment, name)
        if result.ok:
            payment = result.entity
    if payment.status.is_refunded():
        assert seen_completed
        assert payment.provider_payment_id == "pi_x"


@given(steps=st.lists(st.sampled_from(TICKET_TRANSITIONS), min_size=1, max_size=6))
@settings(max_examples=100)
def test_ticket_changes_state_at_most_once(steps):
    ticket = Ticket.create(
        user_id="u1", event_id="e1", payment_id="p1", ticket_type="GA", ticket_price=1
    )
    accepted = 0
    for name in steps:
        result = _apply_ticket(ticket, name)
        if result.ok:
            accepted += 1
            ticket = result.entity
    assert accepted == 1
    assert not ticket.status.is_valid()


# =============================================================================
# ROUND TRIP
# =============================================================================


@given(
    amount=st.floats(min_value=0.01, max_value=1_000_000, allow_nan=False, allow_infinity=False),
    currency=st.sampled_from([c.value for c in CurrencyEnum]),
    provider=st.sampled_from([p.value for p in PaymentProviderEnum]),
    metadata=st.one_of(
        st.none(), st.dictionaries(st.text(max_size=5), st.integers(), min_size=1, max_size=3)
    ),
)
@settings(max_examples=100)
def test_payment_reconstitute_round_trip(amount, currency, provider, metadata):
    payment = _payment(amount, currency, provider).update_metadata(metadata or {})
    assert Payment.reconstitute(**payment.to_object()) == payment


# =============================================================================
# RENDERING
# =============================================================================

_names = st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=6)


@given(path=st.lists(_names, min_size=1, max_size=4))
def test_missing_paths_render_empty(path):
    assert render_template("[{{%s}}]" % ".".join(path), {}) == "[]"


@given(text=st.text(alphabet=st.characters(blacklist_characters="{}"), max_size=40))
def test_text_without_tokens_is_unchanged(text):
    assert render_template(text, {"a": 1}) == text


@given(value=st.text(alphabet=string.ascii_letters + "<>&\"' ", max_size=20))
def test_values_are_substituted_verbatim(value):
    assert render_template("{{user.name}}", {"user": {"name": value}}) == value
