from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.request import Request


async def execute(uow: UnitOfWork, member_id: str) -> list[Request]:
    return await uow.requests.list_for_member(member_id)
