"""
Group: users attending an event together

State machine:
    ACTIVE ⇄ INACTIVE
      └──close──▶ CLOSED (from any state, terminal)

``is_active`` mirrors the status: True only while ACTIVE.
"""

import random
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import Field, ValidationError

from eventhub.config import get_settings
from eventhub.core.errors import ErrorCode, GroupCreateException, GroupUpdateException

from .entity import Entity, TransitionResult
from .providers import Clock, IdGenerator, random_base36, utc_now, uuid4_str
from .value_object import EnumValueObject, resolve_value


class GroupStatusEnum(str, Enum):
    """Group lifecycle states"""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    CLOSED = "CLOSED"


class GroupStatus(EnumValueObject):
    """Validated group status."""

    label: ClassVar[str] = "group status"

    value: GroupStatusEnum

    @classmethod
    def active(cls) -> "GroupStatus":
        return cls(value=GroupStatusEnum.ACTIVE)

    @classmethod
    def inactive(cls) -> "GroupStatus":
        return cls(value=GroupStatusEnum.INACTIVE)

    @classmethod
    def closed(cls) -> "GroupStatus":
        return cls(value=GroupStatusEnum.CLOSED)

    def is_active(self) -> bool:
        return self.value == GroupStatusEnum.ACTIVE

    def is_inactive(self) -> bool:
        return self.value == GroupStatusEnum.INACTIVE

    def is_closed(self) -> bool:
        return self.value == GroupStatusEnum.CLOSED


class Group(Entity):
    """Group aggregate."""

    record_schema: ClassVar[str] = "group"

    name: str = Field(..., min_length=1, description="Display name")
    description: str | None = Field(None, description="Optional description")
    event_id: str = Field(..., min_length=1, description="Event the group attends")
    created_by_id: str = Field(..., min_length=1, description="Creator (first admin)")
    invitation_code: str | None = Field(None, description="Code other users join with")
    max_members: int | None = Field(None, ge=1, description="Capacity; None means unlimited")
    status: GroupStatus = Field(..., description="Lifecycle status")
    metadata: dict[str, Any] | None = Field(None, description="Free-form data")

    @classmethod
    def create(
        cls,
        *,
        name: str,
        event_id: str,
        created_by_id: str,
        description: str | None = None,
        invitation_code: str | None = None,
        max_members: int | None = None,
        status: "str | GroupStatusEnum | GroupStatus | None" = None,
        metadata: dict[str, Any] | None = None,
        is_active: bool | None = None,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
    ) -> "Group":
        """
        Create a group. Default status is ACTIVE.

        Raises:
            GroupCreateException: On missing name/event/creator or invalid capacity
        """
        if not name or not name.strip():
            raise GroupCreateException("Group name is required", ErrorCode.REQUIRED_FIELD)
        if not event_id:
            raise GroupCreateException("Group must belong to an event", ErrorCode.REQUIRED_FIELD)
        if not created_by_id:
            raise GroupCreateException("Group creator is required", ErrorCode.REQUIRED_FIELD)
        if max_members is not None and max_members < 1:
            raise GroupCreateException(
                "max_members must be at least 1", ErrorCode.INVALID_VALUE
            )

        resolved_status = (
            resolve_value(GroupStatus, status, GroupCreateException)
            if status is not None
            else GroupStatus.active()
        )
        now = (clock or utc_now)()
        try:
            return cls(
                id=id or (id_generator or uuid4_str)(),
                name=name,
                description=description,
                event_id=event_id,
                created_by_id=created_by_id,
                invitation_code=invitation_code or None,
                max_members=max_members,
                status=resolved_status,
                metadata=metadata or None,
                is_active=resolved_status.is_active() if is_active is None else is_active,
                created_at=created_at or now,
                updated_at=updated_at or now,
            )
        except ValidationError as e:
            raise GroupCreateException(str(e), ErrorCode.INVALID_VALUE) from e

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def update(
        self,
        name: str,
        description: str | None = None,
        max_members: int | None = None,
        *,
        clock: Clock | None = None,
    ) -> "Group":
        """
        Replace name, description and capacity.

        Omitted optionals are reset to None, not preserved.

        Raises:
            GroupUpdateException: If ``name`` is empty or ``max_members`` < 1
        """
        if not name or not name.strip():
            raise GroupUpdateException("Group name is required", ErrorCode.REQUIRED_FIELD)
        if max_members is not None and max_members < 1:
            raise GroupUpdateException("max_members must be at least 1", ErrorCode.INVALID_VALUE)
        return self._evolve(clock, name=name, description=description, max_members=max_members)

    def generate_invitation_code(
        self,
        code: str | None = None,
        *,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> "Group":
        """
        Set a new invitation code.

        Args:
            code: Explicit code; when omitted an uppercase base-36 code of
                ``invitation_code_length`` characters is drawn from ``rng``
            rng: Random source for the generated code
            clock: Time source for ``updated_at``

        Returns:
            Copy carrying the new ``invitation_code``
        """
        new_code = code or random_base36(get_settings().invitation_code_length, rng)
        return self._evolve(clock, invitation_code=new_code)

    def update_metadata(self, patch: dict[str, Any], *, clock: Clock | None = None) -> "Group":
        return self._evolve(clock, metadata=self._merged_metadata(patch))

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def try_deactivate(self, *, clock: Clock | None = None) -> TransitionResult["Group"]:
        if self.status.is_closed():
            return self._reject(
                "deactivate",
                GroupUpdateException("A closed group cannot be deactivated", ErrorCode.GROUP_CLOSED),
            )
        if self.status.is_inactive() and not self.is_active:
            return self._unchanged("deactivate")
        return self._accept(
            "deactivate", self._evolve(clock, status=GroupStatus.inactive(), is_active=False)
        )

    def deactivate(self, *, clock: Clock | None = None) -> "Group":
        """
        Raises:
            GroupUpdateException: If the group is CLOSED
        """
        return self.try_deactivate(clock=clock).unwrap()

    def try_activate(self, *, clock: Clock | None = None) -> TransitionResult["Group"]:
        if self.status.is_closed():
            return self._reject(
                "activate",
                GroupUpdateException("A closed group cannot be reopened", ErrorCode.GROUP_CLOSED),
            )
        if self.status.is_active() and self.is_active:
            return self._unchanged("activate")
        return self._accept(
            "activate", self._evolve(clock, status=GroupStatus.active(), is_active=True)
        )

    def activate(self, *, clock: Clock | None = None) -> "Group":
        """
        Raises:
            GroupUpdateException: If the group is CLOSED
        """
        return self.try_activate(clock=clock).unwrap()

    def close(self, *, clock: Clock | None = None) -> "Group":
        """Close the group permanently. Allowed from any state."""
        return self._evolve(clock, status=GroupStatus.closed(), is_active=False)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def can_add_member(self, current_member_count: int) -> bool:
        """Whether one more member may join a group of ``current_member_count``."""
        if not self.status.is_active() or not self.is_active:
            return False
        if self.max_members is None:
            return True
        return current_member_count < self.max_members
