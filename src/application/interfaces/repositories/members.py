from __future__ import annotations

from typing import Any, Protocol

from src.domain.models.member import Member


class MembersRepository(Protocol):
    async def add(self, member: Member) -> Member: ...

    async def get_by_member_id(self, member_id: str) -> Member | None: ...

    async def update(self, member_id: str, data: dict[str, Any]) -> Member | None: ...
