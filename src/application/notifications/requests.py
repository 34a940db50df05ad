from __future__ import annotations

import logging
from typing import Any

from src.application.notifications.background import BackgroundNotifier
from src.application.notifications.types import EmailTemplateKey
from src.config.settings import Settings
from src.domain.models.member import Member
from src.domain.models.request import Request
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer

logger = logging.getLogger(__name__)


class RequestNotifier:
    """Best-effort emails around the organisation info request workflow."""

    def __init__(
        self,
        *,
        email_service: EmailService,
        renderer: EmailTemplateRenderer,
        settings: Settings,
        background: BackgroundNotifier,
    ) -> None:
        self.email_service = email_service
        self.renderer = renderer
        self.settings = settings
        self.background = background

    def _request_link(self, request: Request) -> str:
        base = (self.settings.admin_portal_url or "").rstrip("/")
        return f"{base}/requests/{request.id}"

    async def _send(self, template_key: str, to: str, context: dict[str, Any]) -> None:
        message = self.renderer.render(
            template_key=template_key,
            settings=self.settings,
            context=context,
            locale=self.settings.email_default_locale,
        )
        message.to = [to]
        message.from_email = self.settings.email_from_address
        message.from_name = self.settings.email_from_name
        await self.email_service.send(message)

    def _dispatch(self, template_key: str, to: str, context: dict[str, Any], label: str) -> None:
        try:
            self.background.spawn(
                self._send(template_key, to, context),
                description=f"{label} email to {to}",
            )
        except Exception:
            logger.exception("Unexpected error initiating %s email to %s", label, to)

    def request_submitted(self, request: Request, member: Member | None) -> None:
        context = {
            "request_id": str(request.id),
            "member_id": request.member_id,
            "submitted_at": request.created_at.isoformat(),
            "organisation_info": request.organisation_info,
            "request_link": self._request_link(request),
        }
        admin_email = self.settings.admin_email
        if admin_email:
            self._dispatch(
                EmailTemplateKey.REQUEST_SUBMITTED_ADMIN, admin_email, context, "admin notification"
            )
        else:
            logger.warning("ADMIN_EMAIL not configured - skipping admin notification email")

        user_email = member.primary_email if member else None
        if user_email:
            self._dispatch(
                EmailTemplateKey.REQUEST_SUBMITTED_MEMBER, user_email, context, "user notification"
            )
        else:
            logger.warning(
                "No user email found for member %s, skipping user notification", request.member_id
            )

    def status_changed(self, request: Request, member: Member | None) -> None:
        status = request.request_status.value
        context = {
            "request_id": str(request.id),
            "member_id": request.member_id,
            "status": status,
            "comments": request.comments or "",
            "request_link": self._request_link(request),
        }
        if self.settings.notify_admin_on_status_change:
            if self.settings.admin_email:
                self._dispatch(
                    EmailTemplateKey.REQUEST_STATUS_ADMIN,
                    self.settings.admin_email,
                    context,
                    "admin status",
                )
            else:
                logger.warning("ADMIN_EMAIL not configured - skipping admin status email")

        user_email = member.primary_email if member else None
        if user_email:
            self._dispatch(
                EmailTemplateKey.REQUEST_STATUS_MEMBER, user_email, context, "user status"
            )
        else:
            logger.warning(
                "No user email found for member %s, skipping user notification", request.member_id
            )
