from __future__ import annotations

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.member import Member


async def execute(uow: UnitOfWork, member_id: str) -> Member:
    member = await uow.members.get_by_member_id(member_id)
    if not member:
        raise NotFound(f"Member {member_id} not found")
    return member
