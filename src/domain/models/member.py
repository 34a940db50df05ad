from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

PRIMARY_USER_TYPE = "Primary"


@dataclass(slots=True)
class Member:
    id: UUID
    member_id: str
    organisation_info: dict[str, Any] = field(default_factory=dict)
    user_snapshots: list[dict[str, Any]] = field(default_factory=list)
    status: str | None = None
    allowed_user_count: int = 0
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        *,
        member_id: str,
        organisation_info: dict[str, Any] | None = None,
        user_snapshots: list[dict[str, Any]] | None = None,
        status: str | None = None,
        allowed_user_count: int = 0,
    ) -> Member:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            member_id=member_id,
            organisation_info=dict(organisation_info or {}),
            user_snapshots=list(user_snapshots or []),
            status=status,
            allowed_user_count=allowed_user_count,
            created_at=now,
            updated_at=now,
        )

    @property
    def primary_email(self) -> str | None:
        """Email of the primary contact, falling back to the first snapshot."""
        snapshots = [s for s in self.user_snapshots if isinstance(s, dict)]
        for snapshot in snapshots:
            if snapshot.get("userType") == PRIMARY_USER_TYPE and snapshot.get("email"):
                return snapshot["email"]
        if snapshots and snapshots[0].get("email"):
            return snapshots[0]["email"]
        return None
