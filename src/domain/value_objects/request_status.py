from __future__ import annotations

from enum import Enum


class RequestStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]

    def is_decision(self) -> bool:
        return self in {RequestStatus.APPROVED, RequestStatus.REJECTED}

    @property
    def action_verb(self) -> str:
        if self is RequestStatus.APPROVED:
            return "approving"
        if self is RequestStatus.REJECTED:
            return "rejecting"
        return self.value.lower()
