from __future__ import annotations

from dataclasses import dataclass

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.request import Request
from src.domain.value_objects.request_status import RequestStatus

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 200


@dataclass(slots=True)
class ListRequestsResult:
    items: list[Request]
    total: int
    page: int
    page_size: int


def parse_status(status: str | None) -> RequestStatus | None:
    if not status:
        return None
    try:
        return RequestStatus(status)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid status. Must be one of: {', '.join(RequestStatus.values())}"
        ) from exc


async def execute(
    uow: UnitOfWork,
    *,
    status: str | None = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ListRequestsResult:
    parsed = parse_status(status)
    page = max(1, page)
    page_size = max(1, min(MAX_PAGE_SIZE, page_size))
    items, total = await uow.requests.list(status=parsed, page=page, page_size=page_size)
    return ListRequestsResult(items=items, total=total, page=page, page_size=page_size)
