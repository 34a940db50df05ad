from __future__ import annotations

import logging

import pytest

from src.application.notifications.background import BackgroundNotifier
from src.application.notifications.requests import RequestNotifier
from src.application.notifications.types import ALL_TEMPLATE_KEYS, EmailTemplateKey
from src.config.settings import Settings
from src.domain.models.member import Member
from src.domain.models.request import Request
from src.domain.value_objects.request_status import RequestStatus
from src.infrastructure.email.models import EmailMessage, EmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer
from src.infrastructure.email.renderer.organisation_info import format_organisation_info_html


class CollectingEmailService(EmailService):
    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        self.sent.append(message)


class FailingEmailService(EmailService):
    async def send(self, message: EmailMessage) -> None:
        raise ConnectionError("smtp unreachable")


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite:///unused.db",
        "api_key": "k",
        "admin_email": "admin@wfzo.test",
        "admin_portal_url": "https://admin.wfzo.test/",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_format_organisation_info_renders_nested_lists():
    html = format_organisation_info_html(
        {
            "companyName": "Zone <Co>",
            "industries": ["Trade", "Finance"],
            "address": {"city": "Dubai"},
            "verified": True,
            "fax": None,
        }
    )

    assert str(html) == (
        "<ul>"
        "<li><strong>companyName</strong>: Zone &lt;Co&gt;</li>"
        "<li><strong>industries</strong>: <ol><li>Trade</li><li>Finance</li></ol></li>"
        "<li><strong>address</strong>: <ul><li><strong>city</strong>: Dubai</li></ul></li>"
        "<li><strong>verified</strong>: true</li>"
        "<li><strong>fax</strong>: <em>null</em></li>"
        "</ul>"
    )


def test_format_organisation_info_empty_values():
    assert format_organisation_info_html(None) == "<div><em>None</em></div>"
    assert format_organisation_info_html([]) == "<div>[]</div>"
    assert format_organisation_info_html({}) == "<div>{}</div>"


@pytest.mark.parametrize("template_key", sorted(ALL_TEMPLATE_KEYS))
def test_every_template_renders(template_key):
    renderer = EmailTemplateRenderer.create_default()
    message = renderer.render(
        template_key=template_key,
        settings=make_settings(),
        context={
            "request_id": "r-1",
            "member_id": "M-1",
            "status": "APPROVED",
            "comments": "fine",
            "submitted_at": "2024-01-01T00:00:00+00:00",
            "organisation_info": {"companyName": "Zone"},
            "request_link": "https://admin.wfzo.test/requests/r-1",
        },
    )

    assert message.subject
    assert message.text
    assert message.html and "<html" in message.html.lower()


def test_admin_email_embeds_requested_changes_unescaped():
    renderer = EmailTemplateRenderer.create_default()
    message = renderer.render(
        template_key=EmailTemplateKey.REQUEST_SUBMITTED_ADMIN,
        settings=make_settings(),
        context={
            "request_id": "r-1",
            "member_id": "M-1",
            "submitted_at": "now",
            "organisation_info": {"companyName": "Zone"},
            "request_link": "link",
        },
    )

    assert message.subject == "New OrganisationInfo Update Request from M-1"
    assert "<li><strong>companyName</strong>: Zone</li>" in message.html


@pytest.mark.asyncio
async def test_background_notifier_logs_failures(caplog):
    background = BackgroundNotifier()

    async def boom():
        raise RuntimeError("provider down")

    with caplog.at_level(logging.INFO):
        background.spawn(boom(), description="admin notification email to a@b")
        await background.drain()

    assert background.pending == 0
    assert "Background task failed: admin notification email to a@b" in caplog.text


@pytest.mark.asyncio
async def test_request_notifier_sends_admin_and_member_emails():
    email_service = CollectingEmailService()
    background = BackgroundNotifier()
    notifier = RequestNotifier(
        email_service=email_service,
        renderer=EmailTemplateRenderer.create_default(),
        settings=make_settings(),
        background=background,
    )
    member = Member.create(
        member_id="M-1", user_snapshots=[{"email": "owner@zone.test", "userType": "Primary"}]
    )
    request = Request.create(member_id="M-1", organisation_info={"companyName": "Zone"})

    notifier.request_submitted(request, member)
    await background.drain()

    assert sorted(addr for m in email_service.sent for addr in m.to) == [
        "admin@wfzo.test",
        "owner@zone.test",
    ]
    admin_message = next(m for m in email_service.sent if "admin@wfzo.test" in m.to)
    assert f"https://admin.wfzo.test/requests/{request.id}" in admin_message.text
    assert admin_message.from_name == "World FZO"


@pytest.mark.asyncio
async def test_request_notifier_skips_admin_without_address(caplog):
    email_service = CollectingEmailService()
    background = BackgroundNotifier()
    notifier = RequestNotifier(
        email_service=email_service,
        renderer=EmailTemplateRenderer.create_default(),
        settings=make_settings(admin_email=""),
        background=background,
    )
    request = Request.create(member_id="M-1", organisation_info={})

    notifier.request_submitted(request, None)
    await background.drain()

    assert email_service.sent == []
    assert "ADMIN_EMAIL not configured - skipping admin notification email" in caplog.text
    assert "No user email found for member M-1" in caplog.text


@pytest.mark.asyncio
async def test_status_change_admin_email_is_opt_in():
    email_service = CollectingEmailService()
    background = BackgroundNotifier()
    notifier = RequestNotifier(
        email_service=email_service,
        renderer=EmailTemplateRenderer.create_default(),
        settings=make_settings(notify_admin_on_status_change=True),
        background=background,
    )
    request = Request.create(member_id="M-1", organisation_info={})
    request.request_status = RequestStatus.REJECTED
    request.comments = "Missing licence"

    notifier.status_changed(request, None)
    await background.drain()

    assert [m.to for m in email_service.sent] == [["admin@wfzo.test"]]
    assert "Missing licence" in email_service.sent[0].text


@pytest.mark.asyncio
async def test_failing_provider_does_not_raise_to_caller(caplog):
    background = BackgroundNotifier()
    notifier = RequestNotifier(
        email_service=FailingEmailService(),
        renderer=EmailTemplateRenderer.create_default(),
        settings=make_settings(),
        background=background,
    )
    member = Member.create(member_id="M-1", user_snapshots=[{"email": "owner@zone.test"}])

    notifier.request_submitted(Request.create(member_id="M-1", organisation_info={}), member)
    await background.drain()

    assert "smtp unreachable" in caplog.text


def test_status_email_escapes_admin_comments():
    renderer = EmailTemplateRenderer.create_default()
    message = renderer.render(
        template_key=EmailTemplateKey.REQUEST_STATUS_MEMBER,
        settings=make_settings(),
        context={
            "request_id": "r-1",
            "member_id": "M-1",
            "status": "REJECTED",
            "comments": "<script>alert(1)</script> & co",
            "request_link": "link",
        },
    )

    assert "<script>" not in message.html
    assert "&lt;script&gt;alert(1)&lt;/script&gt; &amp; co" in message.html
    # Plain-text bodies are sent verbatim
    assert "<script>alert(1)</script> & co" in message.text
