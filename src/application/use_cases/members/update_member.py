from __future__ import annotations

import logging
from typing import Any

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.member import Member
from src.domain.services.organisation_info import merge_organisation_info

logger = logging.getLogger(__name__)

SUPPORTED_KEYS = ("organisationInfo", "allowedUserCount")


async def execute(uow: UnitOfWork, member_id: str, data: dict[str, Any]) -> Member:
    """
    Merge-update a member.

    ``organisationInfo`` is deep-merged into the stored document so fields absent
    from ``data`` survive; ``allowedUserCount`` is added to the current count.
    Does not commit: callers own the transaction boundary.
    """
    member = await uow.members.get_by_member_id(member_id)
    if not member:
        raise NotFound(f"Member {member_id} not found")

    changes: dict[str, Any] = {}
    if data.get("organisationInfo") is not None:
        try:
            changes["organisation_info"] = merge_organisation_info(
                member.organisation_info, data["organisationInfo"]
            )
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    if data.get("allowedUserCount") is not None:
        increment = data["allowedUserCount"]
        if isinstance(increment, bool) or not isinstance(increment, int):
            raise ValidationError("allowedUserCount must be an integer")
        changes["allowed_user_count"] = (member.allowed_user_count or 0) + increment

    ignored = [key for key in data if key not in SUPPORTED_KEYS]
    if ignored:
        logger.debug("Ignoring unsupported member fields for %s: %s", member_id, ignored)

    if not changes:
        return member
    updated = await uow.members.update(member_id, changes)
    if not updated:
        raise NotFound(f"Member {member_id} not found")
    return updated
