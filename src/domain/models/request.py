from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from src.domain.value_objects.request_status import RequestStatus


@dataclass(slots=True)
class Request:
    """Proposed change to a member's organisation info awaiting admin review."""

    id: UUID
    member_id: str
    organisation_info: dict[str, Any]
    request_status: RequestStatus = RequestStatus.PENDING
    comments: str | None = None
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        *,
        member_id: str,
        organisation_info: dict[str, Any],
        request_status: RequestStatus = RequestStatus.PENDING,
    ) -> Request:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            member_id=member_id,
            organisation_info=dict(organisation_info),
            request_status=request_status,
            comments=None,
            created_at=now,
            updated_at=now,
        )
