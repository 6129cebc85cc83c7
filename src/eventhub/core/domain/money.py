"""
Money: monetary amount with currency

Immutable Pydantic model. Amounts are non-negative and rounded to two
decimals; arithmetic and comparisons are only defined between equal
currencies.
"""

from typing import Self

from pydantic import BaseModel, Field, field_validator


DEFAULT_CURRENCY = "EUR"


class Money(BaseModel):
    """Non-negative amount in a single currency."""

    amount: float = Field(..., ge=0, description="Amount, rounded to 2 decimals")
    currency: str = Field(default=DEFAULT_CURRENCY, min_length=1, description="ISO currency code")

    model_config = {"frozen": True}

    @field_validator("amount")
    @classmethod
    def round_amount(cls, v: float) -> float:
        return round(v, 2)

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def create(cls, amount: float, currency: str = DEFAULT_CURRENCY) -> Self:
        """
        Raises:
            ValueError: If ``amount`` is negative
        """
        if amount < 0:
            raise ValueError("Money amount cannot be negative")
        return cls(amount=amount, currency=currency)

    def add(self, other: "Money") -> "Money":
        self._ensure_same_currency(other, "add")
        return Money.create(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money") -> "Money":
        """
        Raises:
            ValueError: On currency mismatch or a negative result
        """
        self._ensure_same_currency(other, "subtract")
        result = round(self.amount - other.amount, 2)
        if result < 0:
            raise ValueError("Subtraction result cannot be negative")
        return Money.create(result, self.currency)

    def multiply(self, factor: float) -> "Money":
        if factor < 0:
            raise ValueError("Multiplication factor cannot be negative")
        return Money.create(self.amount * factor, self.currency)

    def greater_than(self, other: "Money") -> bool:
        self._ensure_same_currency(other, "compare")
        return self.amount > other.amount

    def less_than(self, other: "Money") -> bool:
        self._ensure_same_currency(other, "compare")
        return self.amount < other.amount

    def equals(self, other: object) -> bool:
        return self == other

    def _ensure_same_currency(self, other: "Money", operation: str) -> None:
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot {operation} amounts in different currencies "
                f"({self.currency} vs {other.currency})"
            )

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"
