from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID

from src.domain.models.request import Request
from src.domain.value_objects.request_status import RequestStatus


class RequestsRepository(Protocol):
    async def add(self, request: Request) -> Request: ...

    async def get(self, request_id: UUID) -> Request | None: ...

    async def get_latest_for_member(self, member_id: str) -> Request | None: ...

    async def update(self, request_id: UUID, data: dict[str, Any]) -> Request | None: ...

    async def list(
        self,
        *,
        status: RequestStatus | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Request], int]: ...

    async def list_for_member(self, member_id: str) -> list[Request]: ...
