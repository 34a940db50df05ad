from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.requests import RequestNotifier
from src.application.use_cases.members import get_member
from src.domain.models.request import Request
from src.domain.value_objects.request_status import RequestStatus


@dataclass(slots=True)
class CreateRequestInput:
    member_id: str
    organisation_info: dict[str, Any]


def ensure_organisation_info(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError("organisationInfo must be an object")
    return value


async def execute(
    uow: UnitOfWork,
    payload: CreateRequestInput,
    notifier: RequestNotifier | None = None,
) -> Request:
    """
    Submit an organisation info change for admin review.

    An existing request for the member (draft or otherwise) becomes the new
    PENDING request instead of creating a second one.
    """
    organisation_info = ensure_organisation_info(payload.organisation_info)
    try:
        member = await get_member.execute(uow, payload.member_id)
    except NotFound as exc:
        raise ValidationError(
            f'Member with ID "{payload.member_id}" not found. '
            "Please provide a valid memberId from the members collection.",
            details={"memberId": payload.member_id},
        ) from exc

    existing = await uow.requests.get_latest_for_member(payload.member_id)
    if existing:
        created = await uow.requests.update(
            existing.id,
            {
                "organisation_info": organisation_info,
                "request_status": RequestStatus.PENDING,
                "comments": None,
            },
        )
        if not created:
            raise ValidationError("Failed to submit draft request.")
    else:
        created = await uow.requests.add(
            Request.create(
                member_id=payload.member_id,
                organisation_info=organisation_info,
                request_status=RequestStatus.PENDING,
            )
        )
    await uow.commit()

    if notifier is not None:
        notifier.request_submitted(created, member)
    return created
