"""Tests for the GroupMember aggregate."""

import pytest

from eventhub.core.domain import GroupMember, GroupMemberRole, GroupMemberStatus
from eventhub.core.errors import (
    ErrorCode,
    GroupMemberCreateException,
    GroupMemberUpdateException,
)


@pytest.fixture
def invited(clock, ids) -> GroupMember:
    return GroupMember.create(
        group_id="g1",
        user_id="u2",
        status="PENDING",
        invited_by_id="u1",
        clock=clock,
        id_generator=ids,
    )


class TestGroupMemberCreate:
    def test_defaults(self, clock, t0):
        member = GroupMember.create(group_id="g1", user_id="u1", clock=clock)
        assert member.role == GroupMemberRole.member()
        assert member.status == GroupMemberStatus.active()
        assert member.joined_at == t0
        assert member.is_active

    def test_pending_has_no_join_date(self, invited):
        assert invited.joined_at is None
        assert invited.invited_by_id == "u1"

    def test_inactive_member_flag(self):
        member = GroupMember.create(group_id="g1", user_id="u1", status="INACTIVE")
        assert not member.is_active

    def test_rejected_member_is_not_active(self):
        member = GroupMember.create(group_id="g1", user_id="u1", status="REJECTED")
        assert not member.is_active
        assert member.joined_at is None

    def test_explicit_timestamps_and_flag(self, t0, t1):
        member = GroupMember.create(
            group_id="g1", user_id="u1", is_active=False, created_at=t0, updated_at=t1
        )
        assert member.created_at == t0
        assert member.updated_at == t1
        assert not member.is_active

    @pytest.mark.parametrize("missing", ["group_id", "user_id"])
    def test_required_ids(self, missing):
        props = {"group_id": "g1", "user_id": "u1", missing: ""}
        with pytest.raises(GroupMemberCreateException):
            GroupMember.create(**props)

    def test_unknown_role_rejected(self):
        with pytest.raises(GroupMemberCreateException) as exc_info:
            GroupMember.create(group_id="g1", user_id="u1", role="OWNER")
        assert exc_info.value.code == ErrorCode.INVALID_VALUE


class TestInvitation:
    def test_accept(self, invited, later, t1):
        member = invited.accept_invitation(clock=later)
        assert member.status.is_active()
        assert member.joined_at == t1

    def test_reject_is_terminal(self, invited):
        rejected = invited.reject_invitation()
        assert rejected.status.is_rejected()
        assert not rejected.is_active
        with pytest.raises(GroupMemberUpdateException) as exc_info:
            rejected.accept_invitation()
        assert exc_info.value.code == ErrorCode.MEMBER_NOT_PENDING
        with pytest.raises(GroupMemberUpdateException):
            rejected.reactivate()

    def test_accept_twice_rejected(self, invited):
        with pytest.raises(GroupMemberUpdateException):
            invited.accept_invitation().accept_invitation()


class TestActivity:
    def test_deactivate_and_reactivate(self, invited):
        member = invited.accept_invitation()
        inactive = member.deactivate()
        assert inactive.status.is_inactive()
        assert not inactive.is_active
        assert inactive.reactivate().is_active

    def test_deactivate_pending_rejected(self, invited):
        result = invited.try_deactivate()
        assert result.error.code == ErrorCode.MEMBER_NOT_ACTIVE

    def test_reactivate_active_rejected(self, invited):
        with pytest.raises(GroupMemberUpdateException) as exc_info:
            invited.accept_invitation().reactivate()
        assert exc_info.value.code == ErrorCode.MEMBER_NOT_INACTIVE

    def test_change_role(self, invited):
        assert invited.change_role("ADMIN").role.is_admin()
        with pytest.raises(GroupMemberUpdateException):
            invited.change_role("OWNER")

    def test_update_metadata(self, invited):
        assert invited.update_metadata({"nick": "Z"}).metadata == {"nick": "Z"}

    def test_reconstitute_round_trip(self, invited):
        member = invited.accept_invitation()
        assert GroupMember.reconstitute(**member.to_object()) == member
