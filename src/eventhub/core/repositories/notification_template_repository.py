"""NotificationTemplate repository interface."""

from abc import abstractmethod
from typing import List, Optional

from eventhub.core.domain.notification_template import (
    NotificationChannel,
    NotificationTemplate,
    NotificationType,
)

from .base import Page, PageRequest, Repository


class NotificationTemplateRepository(Repository[NotificationTemplate]):
    """Persistence contract for notification templates."""

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[NotificationTemplate]:
        """Template registered under ``name``."""

    @abstractmethod
    def find_active_by_type_and_channel(
        self, notification_type: NotificationType, channel: NotificationChannel
    ) -> List[NotificationTemplate]:
        """Active templates usable for sending a notification."""

    @abstractmethod
    def find_all(
        self,
        is_active: Optional[bool] = None,
        page: PageRequest = PageRequest(),
    ) -> Page[NotificationTemplate]:
        """All templates, optionally filtered by activity."""
