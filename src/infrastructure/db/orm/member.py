from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, DateTime, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class MemberORM(Base):
    __tablename__ = "members"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    member_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    organisation_info: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    user_snapshots: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str | None] = mapped_column(String(64), nullable=True)
    allowed_user_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
