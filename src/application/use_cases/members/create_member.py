from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.application.errors import ConflictError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.member import Member
from src.domain.services.organisation_info import validate_organisation_info


@dataclass(slots=True)
class CreateMemberInput:
    member_id: str
    organisation_info: dict[str, Any] = field(default_factory=dict)
    user_snapshots: list[dict[str, Any]] = field(default_factory=list)
    status: str | None = None
    allowed_user_count: int = 0


async def execute(uow: UnitOfWork, payload: CreateMemberInput) -> Member:
    if not payload.member_id or not payload.member_id.strip():
        raise ValidationError("memberId is required")
    try:
        validate_organisation_info(payload.organisation_info)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    if await uow.members.get_by_member_id(payload.member_id):
        raise ConflictError(f"Member {payload.member_id} already exists")
    member = Member.create(
        member_id=payload.member_id,
        organisation_info=payload.organisation_info,
        user_snapshots=payload.user_snapshots,
        status=payload.status,
        allowed_user_count=payload.allowed_user_count,
    )
    created = await uow.members.add(member)
    await uow.commit()
    return created
