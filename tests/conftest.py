from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import cast

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("API_KEY", "test-api-key")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.domain.models.member import Member
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm.member import MemberORM
from src.infrastructure.db.orm.request import RequestORM  # noqa: F401
from src.infrastructure.email.models import EmailMessage, EmailService
from src.interfaces.http.main import create_app

API_KEY = "test-api-key"
ADMIN_EMAIL = "admin@wfzo.test"


class RecordingEmailService(EmailService):
    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        self.sent.append(message)

    def recipients(self) -> list[str]:
        return [addr for message in self.sent for addr in message.to]


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{db_path}",
        api_key=API_KEY,
        admin_email=ADMIN_EMAIL,
        admin_portal_url="https://admin.wfzo.test",
        log_level="INFO",
        environment="test",
    )


@pytest.fixture()
def email_service() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture()
def app(test_settings: Settings, email_service: RecordingEmailService):
    return create_app(settings=test_settings, email_service=email_service)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
        headers={"x-api-key": API_KEY},
    ) as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
        await app.state.background.drain()
        await engine.dispose()


@pytest.fixture()
def api_prefix(test_settings: Settings) -> str:
    return test_settings.api_prefix


@pytest.fixture()
async def seeded_member(app, client) -> Member:
    domain = Member.create(
        member_id="MEMBER-001",
        organisation_info={
            "companyName": "Old Name",
            "websiteUrl": "https://old.example.com",
            "address": {"city": "Dubai", "country": "UAE"},
        },
        user_snapshots=[
            {"id": "u-2", "email": "secondary@member.test", "userType": "Secondry"},
            {"id": "u-1", "email": "primary@member.test", "userType": "Primary"},
        ],
    )
    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        async_session = cast(AsyncSession, session)
        async_session.add(
            MemberORM(
                id=domain.id,
                member_id=domain.member_id,
                organisation_info=domain.organisation_info,
                user_snapshots=domain.user_snapshots,
                allowed_user_count=0,
                created_at=domain.created_at,
                updated_at=domain.updated_at,
            )
        )
        await async_session.commit()
    return domain
