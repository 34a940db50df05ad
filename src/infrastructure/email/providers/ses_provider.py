from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.config.settings import Settings
from src.infrastructure.email.models import EmailDeliveryError, EmailMessage, EmailService

logger = logging.getLogger(__name__)

CHARSET = "UTF-8"


def _content(data: str) -> dict[str, str]:
    return {"Data": data, "Charset": CHARSET}


class SESEmailService(EmailService):
    name = "ses"

    def __init__(self, *, region: str | None = None, client: Any | None = None) -> None:
        # Credentials come from the standard AWS provider chain
        self.client = client or boto3.session.Session().client(
            "ses", region_name=region, config=Config(retries={"max_attempts": 3})
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> SESEmailService:
        return cls(region=settings.ses_region)

    def _build_request(self, message: EmailMessage) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if message.text:
            body["Text"] = _content(message.text)
        if message.html:
            body["Html"] = _content(message.html)
        return {
            "Source": message.sender,
            "Destination": {"ToAddresses": list(message.to), "BccAddresses": list(message.bcc)},
            "Message": {"Subject": _content(message.subject), "Body": body},
        }

    async def send(self, message: EmailMessage) -> None:
        request = self._build_request(message)
        try:
            response = await asyncio.to_thread(self.client.send_email, **request)
        except (BotoCoreError, ClientError) as exc:
            raise EmailDeliveryError(self.name, str(exc)) from exc
        logger.info(
            "Email sent via SES: subject=%r to=%s message_id=%s",
            message.subject,
            ",".join(message.to),
            response.get("MessageId", "unknown"),
        )
