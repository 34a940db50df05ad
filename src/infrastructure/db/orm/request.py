from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, DateTime, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class RequestORM(Base):
    __tablename__ = "requests"
    __table_args__ = (Index("ix_requests_status_created", "request_status", "created_at"),)

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    member_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    organisation_info: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    request_status: Mapped[str] = mapped_column(String(16), nullable=False, default="PENDING")
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
