from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from src.application.notifications.requests import RequestNotifier
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    return settings or get_settings()


def get_request_notifier(request: Request) -> RequestNotifier:
    notifier = getattr(request.app.state, "request_notifier", None)
    if notifier is None:
        raise RuntimeError("Request notifier not configured")
    return notifier
