from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

DEFAULT_FROM_ADDRESS = "donotreply@theonezone.org"


class EmailDeliveryError(Exception):
    """A provider accepted the message for sending but could not deliver it."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


@dataclass(slots=True)
class EmailMessage:
    subject: str
    to: Sequence[str]
    text: str | None = None
    html: str | None = None
    from_email: str | None = None
    from_name: str | None = None
    bcc: Sequence[str] = field(default_factory=list)

    @property
    def recipients(self) -> list[str]:
        """Envelope recipients: visible addresses followed by bcc."""
        return [*self.to, *self.bcc]

    @property
    def sender(self) -> str:
        address = self.from_email or DEFAULT_FROM_ADDRESS
        return f"{self.from_name} <{address}>" if self.from_name else address


class EmailService:
    name = "base"

    async def send(self, message: EmailMessage) -> None:  # pragma: no cover - interface
        raise NotImplementedError
