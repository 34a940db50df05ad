from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.requests import RequestsRepository
from src.domain.models.request import Request
from src.domain.value_objects.request_status import RequestStatus
from src.infrastructure.db.orm.request import RequestORM

_UPDATABLE_FIELDS = ("organisation_info", "request_status", "comments", "deleted_at")


class RequestsSQLAlchemyRepository(RequestsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: RequestORM) -> Request:
        return Request(
            id=orm.id,
            member_id=orm.member_id,
            organisation_info=dict(orm.organisation_info or {}),
            request_status=RequestStatus(orm.request_status),
            comments=orm.comments,
            deleted_at=orm.deleted_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def _get_orm(self, request_id: UUID) -> RequestORM | None:
        stmt = select(RequestORM).where(
            RequestORM.id == request_id, RequestORM.deleted_at.is_(None)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, request: Request) -> Request:
        orm = RequestORM(
            id=request.id,
            member_id=request.member_id,
            organisation_info=dict(request.organisation_info),
            request_status=request.request_status.value,
            comments=request.comments,
            deleted_at=request.deleted_at,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, request_id: UUID) -> Request | None:
        orm = await self._get_orm(request_id)
        return self._to_domain(orm) if orm else None

    async def get_latest_for_member(self, member_id: str) -> Request | None:
        stmt = (
            select(RequestORM)
            .where(RequestORM.member_id == member_id, RequestORM.deleted_at.is_(None))
            .order_by(RequestORM.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update(self, request_id: UUID, data: dict[str, Any]) -> Request | None:
        orm = await self._get_orm(request_id)
        if orm is None:
            return None
        for field_name in _UPDATABLE_FIELDS:
            if field_name not in data:
                continue
            value = data[field_name]
            if field_name == "request_status" and isinstance(value, RequestStatus):
                value = value.value
            elif field_name == "organisation_info":
                # JSON columns only track reassignment
                value = dict(value or {})
            setattr(orm, field_name, value)
        orm.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        return self._to_domain(orm)

    async def list(
        self,
        *,
        status: RequestStatus | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Request], int]:
        conditions = [RequestORM.deleted_at.is_(None)]
        if status is not None:
            conditions.append(RequestORM.request_status == status.value)
        count_stmt = select(func.count()).select_from(RequestORM).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()
        stmt = (
            select(RequestORM)
            .where(*conditions)
            .order_by(RequestORM.created_at.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(r) for r in result.scalars().all()], total

    async def list_for_member(self, member_id: str) -> list[Request]:
        stmt = (
            select(RequestORM)
            .where(RequestORM.member_id == member_id, RequestORM.deleted_at.is_(None))
            .order_by(RequestORM.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(r) for r in result.scalars().all()]
