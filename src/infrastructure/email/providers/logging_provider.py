from __future__ import annotations

import logging

from src.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)


class LoggingEmailService(EmailService):
    """Development provider: records outgoing notifications in the log only."""

    name = "logging"

    async def send(self, message: EmailMessage) -> None:
        logger.info(
            "Email not delivered (logging provider): subject=%r to=%s from=%s",
            message.subject,
            ",".join(message.recipients),
            message.sender,
        )
        if message.text:
            logger.debug("Email text body for %s:\n%s", ",".join(message.to), message.text)
