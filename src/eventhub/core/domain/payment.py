"""
Payment: financial transaction aggregate

Immutable Pydantic aggregate for a payment made by a user for an event.

State machine:
    PENDING ──complete──▶ COMPLETED ──refund──▶ REFUNDED
       │
       ├──fail────▶ FAILED
       └──cancel──▶ CANCELLED

FAILED, CANCELLED and REFUNDED are terminal. There are no back-transitions.
"""

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import Field, ValidationError

from eventhub.core.errors import ErrorCode, PaymentCreateException, PaymentUpdateException

from .entity import Entity, TransitionResult
from .money import Money
from .providers import Clock, IdGenerator, utc_now, uuid4_str
from .value_object import EnumValueObject, resolve_value


# =============================================================================
# ENUMS
# =============================================================================


class PaymentStatusEnum(str, Enum):
    """Payment lifecycle states"""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    CANCELLED = "CANCELLED"


class PaymentProviderEnum(str, Enum):
    """Supported payment providers"""

    STRIPE = "STRIPE"
    PAYPAL = "PAYPAL"
    MERCADOPAGO = "MERCADOPAGO"


class CurrencyEnum(str, Enum):
    """Supported currencies"""

    USD = "USD"
    EUR = "EUR"
    MXN = "MXN"
    COP = "COP"
    BRL = "BRL"
    ARS = "ARS"
    CLP = "CLP"
    PEN = "PEN"
    UYU = "UYU"
    OTHER = "OTHER"


class PaymentMethodEnum(str, Enum):
    """Supported payment methods"""

    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "BANK_TRANSFER"
    CASH = "CASH"
    CRYPTO = "CRYPTO"
    OTHER = "OTHER"
    UNKNOWN = "UNKNOWN"


TERMINAL_PAYMENT_STATUSES: frozenset[PaymentStatusEnum] = frozenset(
    {PaymentStatusEnum.FAILED, PaymentStatusEnum.CANCELLED, PaymentStatusEnum.REFUNDED}
)

CURRENCY_SYMBOLS: dict[CurrencyEnum, str] = {
    CurrencyEnum.USD: "$",
    CurrencyEnum.EUR: "€",
    CurrencyEnum.MXN: "$",
    CurrencyEnum.COP: "$",
    CurrencyEnum.BRL: "R$",
    CurrencyEnum.ARS: "$",
    CurrencyEnum.CLP: "$",
    CurrencyEnum.PEN: "S/",
    CurrencyEnum.UYU: "$U",
}


# =============================================================================
# VALUE OBJECTS
# =============================================================================


class PaymentStatus(EnumValueObject):
    """Validated payment status."""

    label: ClassVar[str] = "payment status"

    value: PaymentStatusEnum

    @classmethod
    def pending(cls) -> "PaymentStatus":
        return cls(value=PaymentStatusEnum.PENDING)

    @classmethod
    def completed(cls) -> "PaymentStatus":
        return cls(value=PaymentStatusEnum.COMPLETED)

    @classmethod
    def failed(cls) -> "PaymentStatus":
        return cls(value=PaymentStatusEnum.FAILED)

    @classmethod
    def refunded(cls) -> "PaymentStatus":
        return cls(value=PaymentStatusEnum.REFUNDED)

    @classmethod
    def cancelled(cls) -> "PaymentStatus":
        return cls(value=PaymentStatusEnum.CANCELLED)

    def is_pending(self) -> bool:
        return self.value == PaymentStatusEnum.PENDING

    def is_completed(self) -> bool:
        return self.value == PaymentStatusEnum.COMPLETED

    def is_failed(self) -> bool:
        return self.value == PaymentStatusEnum.FAILED

    def is_refunded(self) -> bool:
        return self.value == PaymentStatusEnum.REFUNDED

    def is_cancelled(self) -> bool:
        return self.value == PaymentStatusEnum.CANCELLED

    def is_terminal(self) -> bool:
        return self.value in TERMINAL_PAYMENT_STATUSES


class PaymentProvider(EnumValueObject):
    """Validated payment provider."""

    label: ClassVar[str] = "payment provider"

    value: PaymentProviderEnum

    @classmethod
    def stripe(cls) -> "PaymentProvider":
        return cls(value=PaymentProviderEnum.STRIPE)

    @classmethod
    def paypal(cls) -> "PaymentProvider":
        return cls(value=PaymentProviderEnum.PAYPAL)

    @classmethod
    def mercadopago(cls) -> "PaymentProvider":
        return cls(value=PaymentProviderEnum.MERCADOPAGO)

    def is_stripe(self) -> bool:
        return self.value == PaymentProviderEnum.STRIPE

    def is_paypal(self) -> bool:
        return self.value == PaymentProviderEnum.PAYPAL

    def is_mercadopago(self) -> bool:
        return self.value == PaymentProviderEnum.MERCADOPAGO


class Currency(EnumValueObject):
    """
    Validated currency code.

    ``create`` is strict (case-insensitive); ``from_string`` maps unknown
    codes to OTHER.
    """

    label: ClassVar[str] = "currency"

    value: CurrencyEnum

    @classmethod
    def create(cls, raw: "str | Enum") -> "Currency":
        if isinstance(raw, str) and not isinstance(raw, Enum):
            raw = raw.upper()
        return super().create(raw)

    @classmethod
    def from_string(cls, raw: str) -> "Currency":
        upper = raw.upper()
        if upper in cls.allowed_values():
            return cls(value=upper)
        return cls.other()

    @classmethod
    def usd(cls) -> "Currency":
        return cls(value=CurrencyEnum.USD)

    @classmethod
    def eur(cls) -> "Currency":
        return cls(value=CurrencyEnum.EUR)

    @classmethod
    def mxn(cls) -> "Currency":
        return cls(value=CurrencyEnum.MXN)

    @classmethod
    def other(cls) -> "Currency":
        return cls(value=CurrencyEnum.OTHER)

    def is_other(self) -> bool:
        return self.value == CurrencyEnum.OTHER

    def symbol(self) -> str:
        """Display symbol, empty for OTHER."""
        return CURRENCY_SYMBOLS.get(self.value, "")


class PaymentMethod(EnumValueObject):
    """
    Validated payment method.

    ``create`` is strict (case-insensitive); ``from_string`` maps unknown
    methods to UNKNOWN.
    """

    label: ClassVar[str] = "payment method"

    value: PaymentMethodEnum

    @classmethod
    def create(cls, raw: "str | Enum") -> "PaymentMethod":
        if isinstance(raw, str) and not isinstance(raw, Enum):
            raw = raw.upper()
        return super().create(raw)

    @classmethod
    def from_string(cls, raw: str) -> "PaymentMethod":
        upper = raw.upper()
        if upper in cls.allowed_values():
            return cls(value=upper)
        return cls.unknown()

    @classmethod
    def credit_card(cls) -> "PaymentMethod":
        return cls(value=PaymentMethodEnum.CREDIT_CARD)

    @classmethod
    def debit_card(cls) -> "PaymentMethod":
        return cls(value=PaymentMethodEnum.DEBIT_CARD)

    @classmethod
    def paypal(cls) -> "PaymentMethod":
        return cls(value=PaymentMethodEnum.PAYPAL)

    @classmethod
    def bank_transfer(cls) -> "PaymentMethod":
        return cls(value=PaymentMethodEnum.BANK_TRANSFER)

    @classmethod
    def cash(cls) -> "PaymentMethod":
        return cls(value=PaymentMethodEnum.CASH)

    @classmethod
    def crypto(cls) -> "PaymentMethod":
        return cls(value=PaymentMethodEnum.CRYPTO)

    @classmethod
    def unknown(cls) -> "PaymentMethod":
        return cls(value=PaymentMethodEnum.UNKNOWN)

    def is_credit_card(self) -> bool:
        return self.value == PaymentMethodEnum.CREDIT_CARD

    def is_debit_card(self) -> bool:
        return self.value == PaymentMethodEnum.DEBIT_CARD

    def is_card(self) -> bool:
        return self.is_credit_card() or self.is_debit_card()

    def is_paypal(self) -> bool:
        return self.value == PaymentMethodEnum.PAYPAL

    def is_bank_transfer(self) -> bool:
        return self.value == PaymentMethodEnum.BANK_TRANSFER

    def is_unknown(self) -> bool:
        return self.value == PaymentMethodEnum.UNKNOWN


# =============================================================================
# PAYMENT AGGREGATE
# =============================================================================


class Payment(Entity):
    """
    Payment aggregate.

    Every transition returns a new instance; the ``try_*`` forms return a
    ``TransitionResult`` instead of raising.
    """

    record_schema: ClassVar[str] = "payment"

    user_id: str = Field(..., min_length=1, description="Paying user")
    event_id: str = Field(..., min_length=1, description="Event paid for")
    amount: float = Field(..., gt=0, description="Charged amount")
    currency: Currency = Field(..., description="Currency of the amount")
    status: PaymentStatus = Field(..., description="Lifecycle status")
    provider: PaymentProvider = Field(..., description="Payment provider")
    provider_payment_id: str | None = Field(None, description="Identifier at the provider")
    payment_method: PaymentMethod = Field(..., description="Method used to pay")
    description: str | None = Field(None, description="Free-form description")
    metadata: dict[str, Any] | None = Field(None, description="Provider/bookkeeping data")

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        *,
        user_id: str,
        event_id: str,
        amount: float,
        currency: "str | Currency",
        provider: "str | PaymentProviderEnum | PaymentProvider | None",
        status: "str | PaymentStatusEnum | PaymentStatus | None" = None,
        payment_method: "str | PaymentMethodEnum | PaymentMethod | None" = None,
        provider_payment_id: str | None = None,
        description: str | None = None,
        metadata: dict[str, Any] | None = None,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
    ) -> "Payment":
        """
        Create a new payment.

        Defaults: status PENDING, payment method UNKNOWN, id from
        ``id_generator``, timestamps from ``clock``.

        Raises:
            PaymentCreateException: On any missing or invalid input
        """
        if not user_id:
            raise PaymentCreateException("User id is required", ErrorCode.REQUIRED_FIELD)
        if not event_id:
            raise PaymentCreateException("Event id is required", ErrorCode.REQUIRED_FIELD)
        if amount is None or amount <= 0:
            raise PaymentCreateException(
                "Payment amount must be greater than zero", ErrorCode.INVALID_AMOUNT
            )
        if not currency:
            raise PaymentCreateException("Payment currency is required", ErrorCode.REQUIRED_FIELD)
        if not provider:
            raise PaymentCreateException("Payment provider is required", ErrorCode.REQUIRED_FIELD)

        resolved_currency = resolve_value(Currency, currency, PaymentCreateException)
        resolved_provider = resolve_value(PaymentProvider, provider, PaymentCreateException)
        resolved_status = (
            resolve_value(PaymentStatus, status, PaymentCreateException)
            if status is not None
            else PaymentStatus.pending()
        )
        resolved_method = (
            resolve_value(PaymentMethod, payment_method, PaymentCreateException)
            if payment_method is not None
            else PaymentMethod.unknown()
        )

        now = (clock or utc_now)()
        try:
            return cls(
                id=id or (id_generator or uuid4_str)(),
                user_id=user_id,
                event_id=event_id,
                amount=amount,
                currency=resolved_currency,
                status=resolved_status,
                provider=resolved_provider,
                provider_payment_id=provider_payment_id or None,
                payment_method=resolved_method,
                description=description or None,
                metadata=metadata or None,
                created_at=created_at or now,
                updated_at=updated_at or now,
            )
        except ValidationError as e:
            raise PaymentCreateException(str(e), ErrorCode.INVALID_VALUE) from e

    def money(self) -> Money:
        """Amount and currency as a ``Money`` value."""
        return Money.create(self.amount, str(self.currency))

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def try_complete_payment(
        self, provider_payment_id: str, *, clock: Clock | None = None
    ) -> TransitionResult["Payment"]:
        if not self.status.is_pending():
            return self._reject(
                "complete_payment",
                PaymentUpdateException(
                    f"Only pending payments can be completed (status is {self.status})",
                    ErrorCode.PAYMENT_NOT_PENDING,
                ),
            )
        if not provider_payment_id:
            return self._reject(
                "complete_payment",
                PaymentUpdateException(
                    "Provider payment id is required", ErrorCode.REQUIRED_FIELD
                ),
            )
        return self._accept(
            "complete_payment",
            self._evolve(
                clock,
                status=PaymentStatus.completed(),
                provider_payment_id=provider_payment_id,
            ),
        )

    def complete_payment(self, provider_payment_id: str, *, clock: Clock | None = None) -> "Payment":
        """
        Mark the payment as completed at the provider.

        Raises:
            PaymentUpdateException: If not PENDING or ``provider_payment_id`` is empty
        """
        return self.try_complete_payment(provider_payment_id, clock=clock).unwrap()

    def try_fail_payment(
        self, error_details: dict[str, Any] | None = None, *, clock: Clock | None = None
    ) -> TransitionResult["Payment"]:
        if not self.status.is_pending():
            return self._reject(
                "fail_payment",
                PaymentUpdateException(
                    f"Only pending payments can be marked as failed (status is {self.status})",
                    ErrorCode.PAYMENT_NOT_PENDING,
                ),
            )
        metadata = (
            self._merged_metadata({"error": error_details})
            if error_details is not None
            else self.metadata
        )
        return self._accept(
            "fail_payment",
            self._evolve(clock, status=PaymentStatus.failed(), metadata=metadata),
        )

    def fail_payment(
        self, error_details: dict[str, Any] | None = None, *, clock: Clock | None = None
    ) -> "Payment":
        """
        Mark the payment as failed, keeping ``error_details`` under ``metadata["error"]``.

        Raises:
            PaymentUpdateException: If not PENDING
        """
        return self.try_fail_payment(error_details, clock=clock).unwrap()

    def try_refund_payment(
        self, reason: str | None = None, *, clock: Clock | None = None
    ) -> TransitionResult["Payment"]:
        if not self.status.is_completed():
            return self._reject(
                "refund_payment",
                PaymentUpdateException(
                    f"Only completed payments can be refunded (status is {self.status})",
                    ErrorCode.PAYMENT_NOT_COMPLETED,
                ),
            )
        now = (clock or utc_now)()
        metadata = self._merged_metadata({"refund": {"reason": reason, "date": now.isoformat()}})
        return self._accept(
            "refund_payment",
            self._evolve(lambda: now, status=PaymentStatus.refunded(), metadata=metadata),
        )

    def refund_payment(self, reason: str | None = None, *, clock: Clock | None = None) -> "Payment":
        """
        Refund a completed payment, recording ``metadata["refund"] = {reason, date}``.

        Raises:
            PaymentUpdateException: If not COMPLETED
        """
        return self.try_refund_payment(reason, clock=clock).unwrap()

    def try_cancel_payment(self, *, clock: Clock | None = None) -> TransitionResult["Payment"]:
        if not self.status.is_pending():
            return self._reject(
                "cancel_payment",
                PaymentUpdateException(
                    f"Only pending payments can be cancelled (status is {self.status})",
                    ErrorCode.PAYMENT_NOT_PENDING,
                ),
            )
        now = (clock or utc_now)()
        metadata = self._merged_metadata({"cancellation": {"date": now.isoformat()}})
        return self._accept(
            "cancel_payment",
            self._evolve(lambda: now, status=PaymentStatus.cancelled(), metadata=metadata),
        )

    def cancel_payment(self, *, clock: Clock | None = None) -> "Payment":
        """
        Cancel a pending payment, recording ``metadata["cancellation"] = {date}``.

        Raises:
            PaymentUpdateException: If not PENDING
        """
        return self.try_cancel_payment(clock=clock).unwrap()

    def update_metadata(self, patch: dict[str, Any], *, clock: Clock | None = None) -> "Payment":
        """Shallow-merge ``patch`` into the metadata. Always allowed."""
        return self._evolve(clock, metadata=self._merged_metadata(patch))
