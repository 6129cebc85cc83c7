"""
NotificationTemplate: reusable message template per type and channel

Title, body and (for EMAIL) HTML templates contain ``{{path}}`` tokens that
are filled from a data mapping at send time (see ``rendering``).
"""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import Field, ValidationError

from eventhub.core.errors import (
    DomainException,
    ErrorCode,
    NotificationTemplateCreateException,
    NotificationTemplateUpdateException,
)

from .entity import Entity
from .providers import Clock, IdGenerator, utc_now, uuid4_str
from .rendering import render_template
from .value_object import EnumValueObject, resolve_value


# =============================================================================
# ENUMS
# =============================================================================


class NotificationChannelEnum(str, Enum):
    """Delivery channels"""

    EMAIL = "EMAIL"
    PUSH = "PUSH"
    IN_APP = "IN_APP"
    SMS = "SMS"


class NotificationType(str, Enum):
    """Notification kinds a template can be registered for"""

    # System
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"

    # Events
    EVENT_CREATED = "event_created"
    EVENT_UPDATED = "event_updated"
    EVENT_CANCELLED = "event_cancelled"
    EVENT_REMINDER = "event_reminder"
    EVENT_STARTING_SOON = "event_starting_soon"

    # Attendees
    ATTENDEE_ADDED = "attendee_added"
    ATTENDEE_REMOVED = "attendee_removed"

    # Comments and ratings
    COMMENT_ADDED = "comment_added"
    COMMENT_REPLIED = "comment_replied"
    RATING_ADDED = "rating_added"

    REMINDER = "reminder"


class NotificationChannel(EnumValueObject):
    """Validated delivery channel."""

    label: ClassVar[str] = "notification channel"

    value: NotificationChannelEnum

    @classmethod
    def email(cls) -> "NotificationChannel":
        return cls(value=NotificationChannelEnum.EMAIL)

    @classmethod
    def push(cls) -> "NotificationChannel":
        return cls(value=NotificationChannelEnum.PUSH)

    @classmethod
    def in_app(cls) -> "NotificationChannel":
        return cls(value=NotificationChannelEnum.IN_APP)

    @classmethod
    def sms(cls) -> "NotificationChannel":
        return cls(value=NotificationChannelEnum.SMS)

    def is_email(self) -> bool:
        return self.value == NotificationChannelEnum.EMAIL

    def is_push(self) -> bool:
        return self.value == NotificationChannelEnum.PUSH

    def is_in_app(self) -> bool:
        return self.value == NotificationChannelEnum.IN_APP

    def is_sms(self) -> bool:
        return self.value == NotificationChannelEnum.SMS


def _require_text(
    value: str | None, what: str, error_type: type[DomainException]
) -> None:
    if not value or not value.strip():
        raise error_type(f"{what} is required", ErrorCode.REQUIRED_FIELD)


# =============================================================================
# NOTIFICATION TEMPLATE AGGREGATE
# =============================================================================


class NotificationTemplate(Entity):
    """Notification template aggregate."""

    record_schema: ClassVar[str] = "notification_template"

    name: str = Field(..., min_length=1, description="Template name")
    description: str = Field(default="", description="Free-form description")
    notification_type: NotificationType = Field(..., description="Notification kind")
    channel: NotificationChannel = Field(..., description="Delivery channel")
    title_template: str = Field(..., min_length=1, description="Title with {{tokens}}")
    body_template: str = Field(..., min_length=1, description="Body with {{tokens}}")
    html_template: str | None = Field(None, description="HTML body, mandatory for EMAIL")

    @classmethod
    def create(
        cls,
        *,
        name: str,
        notification_type: "str | NotificationType",
        channel: "str | NotificationChannelEnum | NotificationChannel",
        title_template: str,
        body_template: str,
        html_template: str | None = None,
        description: str | None = None,
        is_active: bool = True,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
    ) -> "NotificationTemplate":
        """
        Create a template.

        Raises:
            NotificationTemplateCreateException: On empty name/templates, unknown
                type or channel, or a missing HTML template for EMAIL
        """
        _require_text(name, "Template name", NotificationTemplateCreateException)
        _require_text(title_template, "Title template", NotificationTemplateCreateException)
        _require_text(body_template, "Body template", NotificationTemplateCreateException)

        resolved_channel = resolve_value(
            NotificationChannel, channel, NotificationTemplateCreateException
        )
        try:
            resolved_type = NotificationType(notification_type)
        except ValueError as e:
            raise NotificationTemplateCreateException(
                f"Invalid notification type: {notification_type}", ErrorCode.INVALID_VALUE
            ) from e
        if resolved_channel.is_email() and not html_template:
            raise NotificationTemplateCreateException(
                "An HTML template is required for email notifications",
                ErrorCode.HTML_TEMPLATE_REQUIRED,
            )

        now = (clock or utc_now)()
        try:
            return cls(
                id=id or (id_generator or uuid4_str)(),
                name=name,
                description=description or "",
                notification_type=resolved_type,
                channel=resolved_channel,
                title_template=title_template,
                body_template=body_template,
                html_template=html_template or None,
                is_active=is_active,
                created_at=created_at or now,
                updated_at=updated_at or now,
            )
        except ValidationError as e:
            raise NotificationTemplateCreateException(str(e), ErrorCode.INVALID_VALUE) from e

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def update_name(self, name: str, *, clock: Clock | None = None) -> "NotificationTemplate":
        _require_text(name, "Template name", NotificationTemplateUpdateException)
        return self._evolve(clock, name=name)

    def update_description(
        self, description: str, *, clock: Clock | None = None
    ) -> "NotificationTemplate":
        return self._evolve(clock, description=description or "")

    def update_title_template(
        self, title_template: str, *, clock: Clock | None = None
    ) -> "NotificationTemplate":
        _require_text(title_template, "Title template", NotificationTemplateUpdateException)
        return self._evolve(clock, title_template=title_template)

    def update_body_template(
        self, body_template: str, *, clock: Clock | None = None
    ) -> "NotificationTemplate":
        _require_text(body_template, "Body template", NotificationTemplateUpdateException)
        return self._evolve(clock, body_template=body_template)

    def update_html_template(
        self, html_template: str | None, *, clock: Clock | None = None
    ) -> "NotificationTemplate":
        """
        Raises:
            NotificationTemplateUpdateException: If cleared on an EMAIL template
        """
        if self.channel.is_email() and not html_template:
            raise NotificationTemplateUpdateException(
                "An HTML template is required for email notifications",
                ErrorCode.HTML_TEMPLATE_REQUIRED,
            )
        return self._evolve(clock, html_template=html_template or None)

    def activate(self, *, clock: Clock | None = None) -> "NotificationTemplate":
        """Returns ``self`` if already active."""
        if self.is_active:
            return self
        return self._evolve(clock, is_active=True)

    def deactivate(self, *, clock: Clock | None = None) -> "NotificationTemplate":
        """Returns ``self`` if already inactive."""
        if not self.is_active:
            return self
        return self._evolve(clock, is_active=False)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render_title(self, data: Mapping[str, Any] | None) -> str:
        return render_template(self.title_template, data)

    def render_body(self, data: Mapping[str, Any] | None) -> str:
        return render_template(self.body_template, data)

    def render_html(self, data: Mapping[str, Any] | None) -> str | None:
        """Rendered HTML, or None when the template has no HTML part."""
        if not self.html_template:
            return None
        return render_template(self.html_template, data)
