from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from src.application.errors import AppError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.requests import RequestNotifier
from src.application.use_cases.members import update_member
from src.domain.models.request import Request
from src.domain.value_objects.request_status import RequestStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateRequestInput:
    request_status: RequestStatus
    comments: str | None = None


def validate_comments(status: RequestStatus, comments: str | None) -> str | None:
    """Return the comments to persist: kept for decisions, cleared otherwise."""
    has_comments = bool(comments and comments.strip())
    if status.is_decision():
        if not has_comments:
            raise ValidationError(
                "Comments are required and cannot be empty when "
                f"{status.action_verb}ing a request."
            )
        return comments
    if has_comments:
        raise ValidationError(
            f"Comments must be empty when reverting request status to {status.value}."
        )
    return None


async def _restore(uow: UnitOfWork, request_id: UUID, previous: dict[str, Any]) -> None:
    try:
        await uow.rollback()
        await uow.requests.update(request_id, previous)
        await uow.commit()
    except Exception:
        logger.exception("Rollback failed after member update failure for request %s", request_id)


async def execute(
    uow: UnitOfWork,
    request_id: UUID,
    payload: UpdateRequestInput,
    notifier: RequestNotifier | None = None,
) -> Request:
    """
    Apply an admin decision to a request.

    Approval is a two-step saga: the request status is committed first, then the
    requested organisation info is merged into the member. When the merge fails
    the previous status and comments are written back and the failure is raised
    as a ValidationError. The two steps are not atomic.
    """
    existing = await uow.requests.get(request_id)
    if not existing:
        raise NotFound(f'Request with ID "{request_id}" not found. Ensure the request ID is valid.')

    comments = validate_comments(payload.request_status, payload.comments)
    previous = {"request_status": existing.request_status, "comments": existing.comments}

    updated = await uow.requests.update(
        request_id, {"request_status": payload.request_status, "comments": comments}
    )
    if not updated:
        raise NotFound("Failed to update request.")
    await uow.commit()

    if payload.request_status is RequestStatus.APPROVED:
        try:
            await update_member.execute(
                uow, existing.member_id, {"organisationInfo": existing.organisation_info}
            )
            await uow.commit()
        except Exception as exc:
            await _restore(uow, request_id, previous)
            reason = exc.message if isinstance(exc, AppError) else str(exc)
            raise ValidationError(f"Failed to update member organisationInfo: {reason}") from exc

    if notifier is not None:
        try:
            member = await uow.members.get_by_member_id(existing.member_id)
            if member is None:
                logger.warning(
                    "Member %s not found while sending notification emails", existing.member_id
                )
            notifier.status_changed(updated, member)
        except Exception:
            # Email problems must not affect the decision that was just stored
            logger.exception("Failed to send notification emails for request %s", request_id)
    return updated
