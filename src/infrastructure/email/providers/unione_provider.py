from __future__ import annotations

import logging
from typing import Any

import httpx

from src.config.settings import Settings
from src.infrastructure.email.models import (
    DEFAULT_FROM_ADDRESS,
    EmailDeliveryError,
    EmailMessage,
    EmailService,
)

logger = logging.getLogger(__name__)


class UniOneEmailService(EmailService):
    """Transactional emails through the UniOne HTTP API."""

    name = "unione"

    def __init__(
        self,
        *,
        api_key: str,
        api_url: str = "https://us1.unione.io/en/transactional/api/v1/email/send.json",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> UniOneEmailService:
        if settings.unione_api_key is None:
            raise ValueError("UNIONE_API_KEY is required for the unione email provider")
        return cls(
            api_key=settings.unione_api_key.get_secret_value(), api_url=settings.unione_api_url
        )

    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        body: dict[str, str] = {}
        if message.html:
            body["html"] = message.html
        if message.text:
            body["plaintext"] = message.text
        return {
            "message": {
                "recipients": [{"email": address} for address in message.recipients],
                "from_email": message.from_email or DEFAULT_FROM_ADDRESS,
                "from_name": message.from_name or "World FZO",
                "subject": message.subject,
                "body": body,
                # Request links in notifications must stay unmodified
                "track_links": 0,
                "track_read": 0,
            }
        }

    async def send(self, message: EmailMessage) -> None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    json=self.build_payload(message),
                    headers={"X-API-KEY": self.api_key},
                )
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(self.name, f"HTTP error: {exc}") from exc

        if response.status_code != 200:
            raise EmailDeliveryError(
                self.name, f"API error {response.status_code}: {response.text}"
            )
        result = response.json()
        if result.get("status") != "success":
            raise EmailDeliveryError(self.name, f"send rejected: {result}")
        logger.info(
            "Email sent via UniOne: subject=%r to=%s job_id=%s",
            message.subject,
            ",".join(message.to),
            result.get("job_id", "unknown"),
        )
