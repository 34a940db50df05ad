from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.members import MembersRepository
from src.domain.models.member import Member
from src.infrastructure.db.orm.member import MemberORM

_UPDATABLE_FIELDS = ("organisation_info", "user_snapshots", "status", "allowed_user_count")


class MembersSQLAlchemyRepository(MembersRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: MemberORM) -> Member:
        return Member(
            id=orm.id,
            member_id=orm.member_id,
            organisation_info=dict(orm.organisation_info or {}),
            user_snapshots=list(orm.user_snapshots or []),
            status=orm.status,
            allowed_user_count=orm.allowed_user_count,
            deleted_at=orm.deleted_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def _get_orm(self, member_id: str) -> MemberORM | None:
        stmt = select(MemberORM).where(
            MemberORM.member_id == member_id, MemberORM.deleted_at.is_(None)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, member: Member) -> Member:
        orm = MemberORM(
            id=member.id,
            member_id=member.member_id,
            organisation_info=dict(member.organisation_info),
            user_snapshots=list(member.user_snapshots),
            status=member.status,
            allowed_user_count=member.allowed_user_count,
            deleted_at=member.deleted_at,
            created_at=member.created_at,
            updated_at=member.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Member {member.member_id} already exists") from exc
        return self._to_domain(orm)

    async def get_by_member_id(self, member_id: str) -> Member | None:
        orm = await self._get_orm(member_id)
        return self._to_domain(orm) if orm else None

    async def update(self, member_id: str, data: dict[str, Any]) -> Member | None:
        orm = await self._get_orm(member_id)
        if orm is None:
            return None
        for field_name in _UPDATABLE_FIELDS:
            if field_name in data:
                setattr(orm, field_name, data[field_name])
        orm.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        return self._to_domain(orm)
