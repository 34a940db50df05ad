from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.request import Request


async def execute(uow: UnitOfWork, request_id: UUID) -> Request:
    request = await uow.requests.get(request_id)
    if not request:
        raise NotFound(f'Request with ID "{request_id}" not found. Ensure the request ID is valid.')
    return request
