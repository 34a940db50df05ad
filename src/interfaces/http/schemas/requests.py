from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import ConfigDict, Field

from src.domain.value_objects.request_status import RequestStatus
from src.interfaces.http.schemas.common import CamelModel, PageInfo
from src.interfaces.http.schemas.organisation_info import OrganisationInfoPayload


class RequestCreate(CamelModel):
    organisation_info: OrganisationInfoPayload
    member_id: str = Field(min_length=1)


class RequestDraftSave(CamelModel):
    organisation_info: OrganisationInfoPayload
    member_id: str = Field(min_length=1)


class RequestUpdate(CamelModel):
    request_status: RequestStatus
    comments: str | None = None


class RequestResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    member_id: str
    organisation_info: dict[str, Any]
    request_status: RequestStatus
    comments: str | None
    created_at: datetime
    updated_at: datetime


class RequestsListResponse(CamelModel):
    items: list[RequestResponse]
    page: PageInfo
