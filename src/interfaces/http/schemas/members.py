from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import ConfigDict, EmailStr, Field

from src.interfaces.http.schemas.common import CamelModel
from src.interfaces.http.schemas.organisation_info import OrganisationInfoPayload


class UserSnapshotPayload(CamelModel):
    model_config = ConfigDict(extra="allow")

    id: str
    email: EmailStr
    first_name: str | None = None
    last_name: str | None = None
    user_type: str | None = None


class MemberCreate(CamelModel):
    member_id: str = Field(min_length=1)
    organisation_info: OrganisationInfoPayload | None = None
    user_snapshots: list[UserSnapshotPayload] = Field(default_factory=list)
    status: str | None = None
    allowed_user_count: int = 0


class MemberUpdate(CamelModel):
    organisation_info: OrganisationInfoPayload | None = None
    allowed_user_count: int | None = None


class MemberResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    member_id: str
    organisation_info: dict[str, Any]
    user_snapshots: list[dict[str, Any]]
    status: str | None
    allowed_user_count: int
    created_at: datetime
    updated_at: datetime
