"""
Entity: base contract for identity-bearing aggregates

Every aggregate is an immutable Pydantic model with an ``id``, timestamps
and an ``is_active`` flag. Two construction paths exist:

- ``create(...)`` on each aggregate: runs all invariants, fills defaults
- ``reconstitute(**props)``: rebuilds already-trusted data without validation

Mutations never touch the current instance. A transition copies the model
(``model_copy(deep=True)``), overrides the changed fields plus ``updated_at`` and
returns the copy wrapped in a ``TransitionResult``.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Generic, Self, TypeVar

import structlog
from pydantic import BaseModel, Field

from eventhub.core.contracts import validator_for
from eventhub.core.errors import DomainException

from .providers import Clock, utc_now

logger = structlog.wrap_logger(
    logging.getLogger(__name__),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)

EntityT = TypeVar("EntityT", bound="Entity")


# =============================================================================
# TRANSITION RESULT
# =============================================================================


@dataclass(frozen=True)
class TransitionResult(Generic[EntityT]):
    """
    Outcome of a guarded transition.

    Exactly one of ``entity`` / ``error`` is set. Idempotent no-ops are
    accepted results whose ``entity`` is the original instance and
    ``transition_occurred`` is False.
    """

    transition: str
    entity: EntityT | None
    error: DomainException | None = None
    transition_occurred: bool = True

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> EntityT:
        """
        Return the new entity or raise the rejection error.

        Raises:
            DomainException: The typed exception the guard produced
        """
        if self.error is not None:
            raise self.error
        if self.entity is None:
            raise RuntimeError(f"Transition {self.transition!r} produced neither entity nor error")
        return self.entity


# =============================================================================
# ENTITY BASE
# =============================================================================


class Entity(BaseModel):
    """Base class for aggregates: identity, timestamps, logical activity flag."""

    record_schema: ClassVar[str] = ""

    id: str = Field(..., min_length=1, description="Aggregate identifier")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: datetime = Field(..., description="Last modification timestamp (UTC)")
    is_active: bool = Field(default=True, description="Logical activity flag")

    model_config = {"frozen": True}

    # -------------------------------------------------------------------------
    # Identity and projections
    # -------------------------------------------------------------------------

    def equals(self, other: object) -> bool:
        """Identity comparison: same aggregate type and same ``id``."""
        if not isinstance(other, type(self)):
            return False
        return self.id == other.id

    def to_object(self) -> dict[str, Any]:
        """Shallow plain-data projection; value objects are kept as-is."""
        return dict(self)

    @classmethod
    def reconstitute(cls, **props: Any) -> Self:
        """Rebuild from trusted storage data. No invariant is re-checked."""
        return cls.model_construct(**props)

    def to_record(self) -> dict[str, Any]:
        """JSON-compatible projection: value objects as raw strings, ISO datetimes."""
        return self.model_dump(mode="json")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        """
        Rebuild a typed aggregate from a persisted record.

        The record is checked against the aggregate's JSON Schema contract
        first (see ``eventhub.core.contracts``).

        Raises:
            jsonschema.ValidationError: If the record breaks the contract
        """
        validator_for(cls.record_schema).validate(record)
        return cls.model_validate(record)

    # -------------------------------------------------------------------------
    # Transition helpers
    # -------------------------------------------------------------------------

    def _evolve(self, clock: Clock | None = None, **changes: Any) -> Self:
        """Deep copy with ``changes`` applied and ``updated_at`` refreshed."""
        now = (clock or utc_now)()
        return self.model_copy(update=deepcopy({**changes, "updated_at": now}), deep=True)

    def _merged_metadata(self, patch: dict[str, Any]) -> dict[str, Any]:
        current: dict[str, Any] = getattr(self, "metadata", None) or {}
        return {**current, **patch}

    def _state_label(self) -> str:
        status = getattr(self, "status", None)
        if status is not None:
            return str(status)
        return "active" if self.is_active else "inactive"

    def _accept(self, transition: str, entity: Self) -> "TransitionResult[Self]":
        logger.debug(
            "transition_applied",
            aggregate=type(self).__name__,
            id=self.id,
            transition=transition,
            from_status=self._state_label(),
            to_status=entity._state_label(),
        )
        return TransitionResult(transition=transition, entity=entity)

    def _unchanged(self, transition: str) -> "TransitionResult[Self]":
        logger.debug(
            "transition_skipped",
            aggregate=type(self).__name__,
            id=self.id,
            transition=transition,
            status=self._state_label(),
        )
        return TransitionResult(transition=transition, entity=self, transition_occurred=False)

    def _reject(self, transition: str, error: DomainException) -> "TransitionResult[Self]":
        logger.info(
            "transition_rejected",
            aggregate=type(self).__name__,
            id=self.id,
            transition=transition,
            status=self._state_label(),
            code=error.code.value,
            reason=error.message,
        )
        return TransitionResult(transition=transition, entity=None, error=error)
