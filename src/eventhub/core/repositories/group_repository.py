"""Group and group membership repository interfaces."""

from abc import abstractmethod
from typing import List, Optional

from eventhub.core.domain.group import Group, GroupStatus
from eventhub.core.domain.group_member import GroupMember, GroupMemberStatus

from .base import Page, PageRequest, Repository


class GroupRepository(Repository[Group]):
    """Persistence contract for groups."""

    @abstractmethod
    def find_by_invitation_code(self, invitation_code: str) -> Optional[Group]:
        """Group a user is joining with an invitation code."""

    @abstractmethod
    def find_by_event_id(
        self,
        event_id: str,
        status: Optional[GroupStatus] = None,
        page: PageRequest = PageRequest(),
    ) -> Page[Group]:
        """Groups attending an event, optionally filtered by status."""

    @abstractmethod
    def find_by_member_user_id(
        self, user_id: str, page: PageRequest = PageRequest()
    ) -> Page[Group]:
        """Groups a user belongs to."""


class GroupMemberRepository(Repository[GroupMember]):
    """Persistence contract for group memberships."""

    @abstractmethod
    def find_by_group_and_user(self, group_id: str, user_id: str) -> Optional[GroupMember]:
        """Membership of ``user_id`` in ``group_id``, if any."""

    @abstractmethod
    def find_by_group_id(
        self,
        group_id: str,
        status: Optional[GroupMemberStatus] = None,
        page: PageRequest = PageRequest(),
    ) -> Page[GroupMember]:
        """Members of a group, optionally filtered by status."""

    @abstractmethod
    def find_pending_by_user_id(self, user_id: str) -> List[GroupMember]:
        """Open invitations addressed to a user."""

    @abstractmethod
    def count_active_by_group_id(self, group_id: str) -> int:
        """Active member count, the input of ``Group.can_add_member``."""
