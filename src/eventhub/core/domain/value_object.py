"""
ValueObject: base contract for enumerated status/type wrappers

Immutable Pydantic model around a single enum member. Instances are created
only through the validating ``create`` factory or named constructors defined
by subclasses (``PaymentStatus.pending()``), so an aggregate field of a value
object type never holds an unchecked raw string.

Contract:
- ``value``: the wrapped enum member
- ``equals(other)`` / ``==``: comparison by underlying value
- ``str(vo)``: the raw enum string
- ``is_<member>()`` predicates, defined per subclass
"""

from enum import Enum
from typing import Any, ClassVar, Self, TypeVar

from pydantic import BaseModel, ValidationError, model_serializer, model_validator

from eventhub.core.errors import DomainException, ErrorCode


class EnumValueObject(BaseModel):
    """
    Base class for enum-backed value objects.

    Subclasses narrow the ``value`` annotation to their enum and set ``label``
    (used in error messages).
    """

    label: ClassVar[str] = "value"

    value: Any

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _wrap_raw_value(cls, data: Any) -> Any:
        """Accept a bare enum member or raw string in place of ``{"value": ...}``."""
        if isinstance(data, (str, Enum)):
            return {"value": data}
        if isinstance(data, EnumValueObject):
            return {"value": data.value.value}
        return data

    @model_serializer
    def _serialize(self) -> str:
        return self.value.value

    @classmethod
    def enum_type(cls) -> type[Enum]:
        """Enum class wrapped by this value object."""
        return cls.model_fields["value"].annotation  # type: ignore[return-value]

    @classmethod
    def allowed_values(cls) -> list[str]:
        """Raw strings accepted by ``create``."""
        return [member.value for member in cls.enum_type()]

    @classmethod
    def create(cls, raw: str | Enum) -> Self:
        """
        Validating factory.

        Args:
            raw: Raw enum string or enum member

        Returns:
            Value object wrapping the matching member

        Raises:
            ValueError: If ``raw`` is not one of the allowed values
        """
        try:
            return cls(value=raw)
        except ValidationError:
            raise ValueError(
                f"Invalid {cls.label}: {raw!s}. "
                f"Allowed values: {', '.join(cls.allowed_values())}"
            ) from None

    @classmethod
    def coerce(cls, raw: "str | Enum | EnumValueObject") -> Self:
        """Return ``raw`` unchanged if already this type, else ``create(raw)``."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, EnumValueObject):
            return cls.create(raw.value.value)
        return cls.create(raw)

    def equals(self, other: object) -> bool:
        """Value comparison; ``None`` and foreign types compare unequal."""
        if not isinstance(other, EnumValueObject):
            return False
        return self.value.value == other.value.value

    def __str__(self) -> str:
        return self.value.value


EnumValueObjectT = TypeVar("EnumValueObjectT", bound=EnumValueObject)


def resolve_value(
    vo_type: type[EnumValueObjectT],
    raw: "str | Enum | EnumValueObject",
    error_type: type[DomainException],
) -> EnumValueObjectT:
    """
    Coerce ``raw`` into ``vo_type``, re-raising failures as a domain error.

    Raises:
        DomainException: ``error_type`` with code INVALID_VALUE
    """
    try:
        return vo_type.coerce(raw)
    except ValueError as e:
        raise error_type(str(e), ErrorCode.INVALID_VALUE) from e
