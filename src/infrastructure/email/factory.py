from __future__ import annotations

import logging

from src.config.settings import Settings
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.providers.logging_provider import LoggingEmailService

logger = logging.getLogger(__name__)


def build_email_service(settings: Settings) -> EmailService:
    """Pick the configured provider, falling back to logging when it cannot be built."""
    provider = (settings.email_provider or "logging").lower()
    try:
        if provider == "smtp":
            from src.infrastructure.email.providers.smtp_provider import SMTPEmailService

            return SMTPEmailService.from_settings(settings)
        if provider == "ses":
            from src.infrastructure.email.providers.ses_provider import SESEmailService

            return SESEmailService.from_settings(settings)
        if provider == "unione":
            from src.infrastructure.email.providers.unione_provider import UniOneEmailService

            return UniOneEmailService.from_settings(settings)
    except ValueError as exc:
        logger.warning("%s - falling back to logging email provider", exc)
        return LoggingEmailService()
    if provider != "logging":
        logger.warning("Unknown email provider %r - using logging provider", provider)
    return LoggingEmailService()
