"""
Tests for NotificationTemplate and token rendering

Coverage:
- create(): required templates, EMAIL requires HTML
- update_* re-validation
- Idempotent activate/deactivate
- {{dotted.path}} rendering, missing data renders empty, no escaping
"""

from dataclasses import dataclass

import pytest

from eventhub.core.domain import (
    NotificationChannel,
    NotificationTemplate,
    NotificationType,
    render_template,
)
from eventhub.core.errors import (
    ErrorCode,
    NotificationTemplateCreateException,
    NotificationTemplateUpdateException,
)


@pytest.fixture
def push_template(clock, ids) -> NotificationTemplate:
    return NotificationTemplate.create(
        name="welcome",
        notification_type="info",
        channel="PUSH",
        title_template="Hi {{user.name}}",
        body_template="Hola {{user.name}}",
        clock=clock,
        id_generator=ids,
    )


@pytest.fixture
def email_template() -> NotificationTemplate:
    return NotificationTemplate.create(
        name="reminder",
        notification_type=NotificationType.EVENT_REMINDER,
        channel=NotificationChannel.email(),
        title_template="{{event.title}} starts soon",
        body_template="See you at {{event.venue}}",
        html_template="<p>{{event.title}}</p>",
    )


class TestNotificationTemplateCreate:
    def test_defaults(self, push_template):
        assert push_template.is_active
        assert push_template.description == ""
        assert push_template.html_template is None
        assert push_template.notification_type == NotificationType.INFO
        assert push_template.channel.is_push()

    def test_email_requires_html(self):
        with pytest.raises(NotificationTemplateCreateException) as exc_info:
            NotificationTemplate.create(
                name="n",
                notification_type="info",
                channel="EMAIL",
                title_template="t",
                body_template="b",
            )
        assert exc_info.value.code == ErrorCode.HTML_TEMPLATE_REQUIRED

    @pytest.mark.parametrize("field", ["name", "title_template", "body_template"])
    def test_blank_required_text(self, field):
        props = dict(
            name="n", notification_type="info", channel="SMS", title_template="t", body_template="b"
        )
        props[field] = "   "
        with pytest.raises(NotificationTemplateCreateException) as exc_info:
            NotificationTemplate.create(**props)
        assert exc_info.value.code == ErrorCode.REQUIRED_FIELD

    def test_unknown_type_rejected(self):
        with pytest.raises(NotificationTemplateCreateException):
            NotificationTemplate.create(
                name="n",
                notification_type="birthday",
                channel="SMS",
                title_template="t",
                body_template="b",
            )

    def test_unknown_channel_rejected(self):
        with pytest.raises(NotificationTemplateCreateException):
            NotificationTemplate.create(
                name="n",
                notification_type="info",
                channel="FAX",
                title_template="t",
                body_template="b",
            )


class TestNotificationTemplateUpdates:
    def test_update_name(self, push_template, later, t1):
        renamed = push_template.update_name("greeting", clock=later)
        assert renamed.name == "greeting"
        assert renamed.updated_at == t1
        with pytest.raises(NotificationTemplateUpdateException):
            push_template.update_name("")

    def test_update_templates(self, push_template):
        updated = push_template.update_title_template("T").update_body_template("B")
        assert (updated.title_template, updated.body_template) == ("T", "B")
        with pytest.raises(NotificationTemplateUpdateException):
            push_template.update_body_template(" ")
        with pytest.raises(NotificationTemplateUpdateException):
            push_template.update_title_template("")

    def test_update_description(self, push_template):
        assert push_template.update_description("greets").description == "greets"

    def test_html_can_be_cleared_off_email(self, push_template):
        with_html = push_template.update_html_template("<b>x</b>")
        assert with_html.update_html_template(None).html_template is None

    def test_html_cannot_be_cleared_on_email(self, email_template):
        with pytest.raises(NotificationTemplateUpdateException) as exc_info:
            email_template.update_html_template("")
        assert exc_info.value.code == ErrorCode.HTML_TEMPLATE_REQUIRED

    def test_activate_deactivate_idempotent(self, push_template):
        assert push_template.activate() is push_template
        inactive = push_template.deactivate()
        assert not inactive.is_active
        assert inactive.deactivate() is inactive
        assert inactive.activate().is_active

    def test_reconstitute_round_trip(self, email_template):
        assert NotificationTemplate.reconstitute(**email_template.to_object()) == email_template


class TestRendering:
    def test_render_body(self, push_template):
        assert push_template.render_body({"user": {"name": "Ana"}}) == "Hola Ana"

    def test_missing_path_renders_empty(self):
        template = NotificationTemplate.create(
            name="age",
            notification_type="info",
            channel="IN_APP",
            title_template="t",
            body_template="Edad: {{user.age}}",
        )
        assert template.render_body({"user": {"name": "Ana"}}) == "Edad: "

    def test_null_intermediate_renders_empty(self, push_template):
        assert push_template.render_title({"user": None}) == "Hi "
        assert push_template.render_title({}) == "Hi "
        assert push_template.render_title(None) == "Hi "

    def test_render_html(self, email_template, push_template):
        assert email_template.render_html({"event": {"title": "Jazz"}}) == "<p>Jazz</p>"
        assert push_template.render_html({"event": {"title": "Jazz"}}) is None

    def test_no_escaping(self, email_template):
        rendered = email_template.render_html({"event": {"title": "<script>x</script>"}})
        assert rendered == "<p><script>x</script></p>"

    def test_whitespace_inside_braces(self):
        assert render_template("{{ user.name }}!", {"user": {"name": "Bo"}}) == "Bo!"

    def test_scalars_are_stringified(self):
        data = {"n": 3, "ok": True, "off": False, "price": 9.5}
        assert render_template("{{n}} {{ok}} {{off}} {{price}}", data) == "3 true false 9.5"

    def test_sequence_index(self):
        data = {"seats": ["A1", "A2"]}
        assert render_template("{{seats.1}}", data) == "A2"
        assert render_template("{{seats.5}}", data) == ""

    def test_object_attributes_are_not_read(self):
        @dataclass
        class Venue:
            city: str

        data = {"venue": Venue(city="Lima"), "user": {"name": "Ana"}}
        assert render_template("{{venue.city}}", data) == ""
        assert render_template("{{user.name.__class__}}", data) == ""
        assert render_template("{{user.get.__name__}}", data) == ""

    def test_aggregate_internals_are_not_exposed(self, push_template):
        data = {"tpl": push_template}
        assert render_template("{{tpl.activate.__func__.__globals__.__name__}}", data) == ""
        assert render_template("{{tpl.name}}", data) == ""

    def test_integral_floats_render_without_fraction(self):
        data = {"total": 1.0, "count": 3, "price": 9.5}
        assert render_template("{{total}} {{count}} {{price}}", data) == "1 3 9.5"

    def test_repeated_tokens(self):
        assert render_template("{{a}}{{a}}", {"a": "x"}) == "xx"

    def test_text_without_tokens(self):
        assert render_template("plain {text}", {"text": "no"}) == "plain {text}"
