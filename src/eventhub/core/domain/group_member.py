"""
GroupMember: a user's membership in a group

State machine:
    PENDING ──accept──▶ ACTIVE ⇄ INACTIVE
       └────reject──▶ REJECTED (terminal)

``is_active`` is False while INACTIVE or REJECTED.
"""

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import Field, ValidationError

from eventhub.core.errors import (
    ErrorCode,
    GroupMemberCreateException,
    GroupMemberUpdateException,
)

from .entity import Entity, TransitionResult
from .providers import Clock, IdGenerator, utc_now, uuid4_str
from .value_object import EnumValueObject, resolve_value


class GroupMemberRoleEnum(str, Enum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class GroupMemberStatusEnum(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


class GroupMemberRole(EnumValueObject):
    label: ClassVar[str] = "group member role"

    value: GroupMemberRoleEnum

    @classmethod
    def admin(cls) -> "GroupMemberRole":
        return cls(value=GroupMemberRoleEnum.ADMIN)

    @classmethod
    def member(cls) -> "GroupMemberRole":
        return cls(value=GroupMemberRoleEnum.MEMBER)

    def is_admin(self) -> bool:
        return self.value == GroupMemberRoleEnum.ADMIN

    def is_member(self) -> bool:
        return self.value == GroupMemberRoleEnum.MEMBER


class GroupMemberStatus(EnumValueObject):
    label: ClassVar[str] = "group member status"

    value: GroupMemberStatusEnum

    @classmethod
    def active(cls) -> "GroupMemberStatus":
        return cls(value=GroupMemberStatusEnum.ACTIVE)

    @classmethod
    def inactive(cls) -> "GroupMemberStatus":
        return cls(value=GroupMemberStatusEnum.INACTIVE)

    @classmethod
    def pending(cls) -> "GroupMemberStatus":
        return cls(value=GroupMemberStatusEnum.PENDING)

    @classmethod
    def rejected(cls) -> "GroupMemberStatus":
        return cls(value=GroupMemberStatusEnum.REJECTED)

    def is_active(self) -> bool:
        return self.value == GroupMemberStatusEnum.ACTIVE

    def is_inactive(self) -> bool:
        return self.value == GroupMemberStatusEnum.INACTIVE

    def is_pending(self) -> bool:
        return self.value == GroupMemberStatusEnum.PENDING

    def is_rejected(self) -> bool:
        return self.value == GroupMemberStatusEnum.REJECTED


def _is_live(status: GroupMemberStatus) -> bool:
    return not (status.is_inactive() or status.is_rejected())


class GroupMember(Entity):
    """Group membership aggregate."""

    record_schema: ClassVar[str] = "group_member"

    group_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    role: GroupMemberRole
    status: GroupMemberStatus
    invited_by_id: str | None = None
    joined_at: datetime | None = Field(None, description="Set when the membership became ACTIVE")
    metadata: dict[str, Any] | None = None

    @classmethod
    def create(
        cls,
        *,
        group_id: str,
        user_id: str,
        role: "str | GroupMemberRoleEnum | GroupMemberRole | None" = None,
        status: "str | GroupMemberStatusEnum | GroupMemberStatus | None" = None,
        invited_by_id: str | None = None,
        joined_at: datetime | None = None,
        metadata: dict[str, Any] | None = None,
        is_active: bool | None = None,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
    ) -> "GroupMember":
        """
        Add a user to a group, or invite them with ``status="PENDING"``.

        Defaults: role MEMBER, status ACTIVE. ``joined_at`` is only set for
        ACTIVE memberships. ``is_active`` defaults to False for INACTIVE and
        REJECTED memberships.

        Raises:
            GroupMemberCreateException: On missing ids or unknown role/status
        """
        if not group_id:
            raise GroupMemberCreateException(
                "Member must belong to a group", ErrorCode.REQUIRED_FIELD
            )
        if not user_id:
            raise GroupMemberCreateException("Member must be a user", ErrorCode.REQUIRED_FIELD)

        resolved_role = (
            resolve_value(GroupMemberRole, role, GroupMemberCreateException)
            if role is not None
            else GroupMemberRole.member()
        )
        resolved_status = (
            resolve_value(GroupMemberStatus, status, GroupMemberCreateException)
            if status is not None
            else GroupMemberStatus.active()
        )
        now = (clock or utc_now)()
        try:
            return cls(
                id=id or (id_generator or uuid4_str)(),
                group_id=group_id,
                user_id=user_id,
                role=resolved_role,
                status=resolved_status,
                invited_by_id=invited_by_id or None,
                joined_at=(joined_at or now) if resolved_status.is_active() else None,
                metadata=metadata or None,
                is_active=_is_live(resolved_status) if is_active is None else is_active,
                created_at=created_at or now,
                updated_at=updated_at or now,
            )
        except ValidationError as e:
            raise GroupMemberCreateException(str(e), ErrorCode.INVALID_VALUE) from e

    def change_role(
        self,
        role: "str | GroupMemberRoleEnum | GroupMemberRole",
        *,
        clock: Clock | None = None,
    ) -> "GroupMember":
        """
        Raises:
            GroupMemberUpdateException: If ``role`` is not a known value
        """
        new_role = resolve_value(GroupMemberRole, role, GroupMemberUpdateException)
        return self._evolve(clock, role=new_role)

    def try_accept_invitation(
        self, *, clock: Clock | None = None
    ) -> TransitionResult["GroupMember"]:
        if not self.status.is_pending():
            return self._reject(
                "accept_invitation",
                GroupMemberUpdateException(
                    "Only pending invitations can be accepted", ErrorCode.MEMBER_NOT_PENDING
                ),
            )
        now = (clock or utc_now)()
        return self._accept(
            "accept_invitation",
            self._evolve(
                lambda: now, status=GroupMemberStatus.active(), joined_at=now, is_active=True
            ),
        )

    def accept_invitation(self, *, clock: Clock | None = None) -> "GroupMember":
        return self.try_accept_invitation(clock=clock).unwrap()

    def try_reject_invitation(
        self, *, clock: Clock | None = None
    ) -> TransitionResult["GroupMember"]:
        if not self.status.is_pending():
            return self._reject(
                "reject_invitation",
                GroupMemberUpdateException(
                    "Only pending invitations can be rejected", ErrorCode.MEMBER_NOT_PENDING
                ),
            )
        return self._accept(
            "reject_invitation",
            self._evolve(clock, status=GroupMemberStatus.rejected(), is_active=False),
        )

    def reject_invitation(self, *, clock: Clock | None = None) -> "GroupMember":
        return self.try_reject_invitation(clock=clock).unwrap()

    def try_deactivate(self, *, clock: Clock | None = None) -> TransitionResult["GroupMember"]:
        if not self.status.is_active():
            return self._reject(
                "deactivate",
                GroupMemberUpdateException(
                    "Only active members can be deactivated", ErrorCode.MEMBER_NOT_ACTIVE
                ),
            )
        return self._accept(
            "deactivate",
            self._evolve(clock, status=GroupMemberStatus.inactive(), is_active=False),
        )

    def deactivate(self, *, clock: Clock | None = None) -> "GroupMember":
        return self.try_deactivate(clock=clock).unwrap()

    def try_reactivate(self, *, clock: Clock | None = None) -> TransitionResult["GroupMember"]:
        if not self.status.is_inactive():
            return self._reject(
                "reactivate",
                GroupMemberUpdateException(
                    "Only inactive members can be reactivated", ErrorCode.MEMBER_NOT_INACTIVE
                ),
            )
        return self._accept(
            "reactivate",
            self._evolve(clock, status=GroupMemberStatus.active(), is_active=True),
        )

    def reactivate(self, *, clock: Clock | None = None) -> "GroupMember":
        return self.try_reactivate(clock=clock).unwrap()

    def update_metadata(
        self, patch: dict[str, Any], *, clock: Clock | None = None
    ) -> "GroupMember":
        return self._evolve(clock, metadata=self._merged_metadata(patch))
