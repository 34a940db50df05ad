from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.requests.create_request import ensure_organisation_info
from src.domain.models.request import Request
from src.domain.value_objects.request_status import RequestStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SaveDraftInput:
    member_id: str
    organisation_info: dict[str, Any]


async def execute(uow: UnitOfWork, payload: SaveDraftInput) -> Request:
    # Drafts skip member validation and send no emails
    organisation_info = ensure_organisation_info(payload.organisation_info)
    if not payload.member_id:
        raise ValidationError("memberId is required")
    changes = {
        "organisation_info": organisation_info,
        "request_status": RequestStatus.DRAFT,
        "comments": None,
    }
    existing = await uow.requests.get_latest_for_member(payload.member_id)
    if existing:
        updated = await uow.requests.update(existing.id, changes)
        if not updated:
            raise ValidationError("Failed to update draft request.")
        await uow.commit()
        if existing.request_status is RequestStatus.DRAFT:
            logger.info("Draft request updated for member %s", payload.member_id)
        else:
            logger.info(
                "Request for member %s converted to DRAFT (was %s)",
                payload.member_id,
                existing.request_status.value,
            )
        return updated

    created = await uow.requests.add(
        Request.create(
            member_id=payload.member_id,
            organisation_info=organisation_info,
            request_status=RequestStatus.DRAFT,
        )
    )
    await uow.commit()
    logger.info("Draft request created for member %s", payload.member_id)
    return created
