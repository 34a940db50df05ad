from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.application.notifications.requests import RequestNotifier
from src.application.use_cases.requests import (
    create_request,
    get_request,
    list_member_requests,
    list_requests,
    save_draft,
    update_request,
)
from src.config.settings import Settings
from src.interfaces.http.deps import get_app_settings, get_request_notifier, get_uow
from src.interfaces.http.schemas.common import PageInfo
from src.interfaces.http.schemas.requests import (
    RequestCreate,
    RequestDraftSave,
    RequestResponse,
    RequestsListResponse,
    RequestUpdate,
)

router = APIRouter(prefix="/requests", tags=["requests"])


@router.post("", response_model=RequestResponse, status_code=status.HTTP_201_CREATED)
async def create_request_endpoint(
    payload: RequestCreate,
    uow=Depends(get_uow),
    notifier: RequestNotifier = Depends(get_request_notifier),
) -> RequestResponse:
    """Submit an organisation info update for admin approval (PENDING)."""
    created = await create_request.execute(
        uow,
        create_request.CreateRequestInput(
            member_id=payload.member_id,
            organisation_info=payload.organisation_info.to_document(),
        ),
        notifier,
    )
    return RequestResponse.model_validate(created)


@router.post("/draft", response_model=RequestResponse, status_code=status.HTTP_201_CREATED)
async def save_draft_endpoint(payload: RequestDraftSave, uow=Depends(get_uow)) -> RequestResponse:
    """Save an incomplete update as DRAFT; no member check, no emails."""
    saved = await save_draft.execute(
        uow,
        save_draft.SaveDraftInput(
            member_id=payload.member_id,
            organisation_info=payload.organisation_info.to_document(),
        ),
    )
    return RequestResponse.model_validate(saved)


@router.put("/{request_id}", response_model=RequestResponse)
async def update_request_endpoint(
    request_id: UUID,
    payload: RequestUpdate,
    uow=Depends(get_uow),
    notifier: RequestNotifier = Depends(get_request_notifier),
) -> RequestResponse:
    """Approve or reject a request. Approval merges the changes into the member."""
    updated = await update_request.execute(
        uow,
        request_id,
        update_request.UpdateRequestInput(
            request_status=payload.request_status, comments=payload.comments
        ),
        notifier,
    )
    return RequestResponse.model_validate(updated)


@router.get("", response_model=RequestsListResponse)
async def list_requests_endpoint(
    status_filter: str | None = Query(
        None, alias="status", description="Filter by DRAFT, PENDING, APPROVED or REJECTED"
    ),
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, alias="pageSize", ge=1, le=200),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
) -> RequestsListResponse:
    result = await list_requests.execute(
        uow,
        status=status_filter,
        page=page,
        page_size=page_size or settings.requests_default_page_size,
    )
    return RequestsListResponse(
        items=[RequestResponse.model_validate(item) for item in result.items],
        page=PageInfo(total=result.total, page=result.page, page_size=result.page_size),
    )


@router.get("/member/{member_id}", response_model=list[RequestResponse])
async def list_member_requests_endpoint(member_id: str, uow=Depends(get_uow)):
    items = await list_member_requests.execute(uow, member_id)
    return [RequestResponse.model_validate(item) for item in items]


@router.get("/{request_id}", response_model=RequestResponse)
async def get_request_endpoint(request_id: UUID, uow=Depends(get_uow)) -> RequestResponse:
    found = await get_request.execute(uow, request_id)
    return RequestResponse.model_validate(found)
