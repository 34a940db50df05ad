from __future__ import annotations

from fastapi import APIRouter, Depends, status

from src.application.use_cases.members import create_member, get_member, update_member
from src.interfaces.http.deps import get_uow
from src.interfaces.http.schemas.members import MemberCreate, MemberResponse, MemberUpdate

router = APIRouter(prefix="/members", tags=["members"])


@router.post("", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def create_member_endpoint(payload: MemberCreate, uow=Depends(get_uow)) -> MemberResponse:
    created = await create_member.execute(
        uow,
        create_member.CreateMemberInput(
            member_id=payload.member_id,
            organisation_info=(
                payload.organisation_info.to_document() if payload.organisation_info else {}
            ),
            user_snapshots=[s.model_dump(by_alias=True) for s in payload.user_snapshots],
            status=payload.status,
            allowed_user_count=payload.allowed_user_count,
        ),
    )
    return MemberResponse.model_validate(created)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member_endpoint(member_id: str, uow=Depends(get_uow)) -> MemberResponse:
    member = await get_member.execute(uow, member_id)
    return MemberResponse.model_validate(member)


@router.patch("/{member_id}", response_model=MemberResponse)
async def update_member_endpoint(
    member_id: str, payload: MemberUpdate, uow=Depends(get_uow)
) -> MemberResponse:
    """Merge-update: fields not present in the payload are left untouched."""
    data: dict = {}
    if payload.organisation_info is not None:
        data["organisationInfo"] = payload.organisation_info.to_document()
    if payload.allowed_user_count is not None:
        data["allowedUserCount"] = payload.allowed_user_count
    updated = await update_member.execute(uow, member_id, data)
    await uow.commit()
    return MemberResponse.model_validate(updated)
