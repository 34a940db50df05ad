from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.application.notifications.background import BackgroundNotifier
from src.application.notifications.requests import RequestNotifier
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import create_engine, create_session_factory
from src.infrastructure.email.factory import build_email_service
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer
from src.interfaces.http.routers import members as members_router
from src.interfaces.http.routers import requests as requests_router
from src.interfaces.middleware.api_key_middleware import ApiKeyMiddleware
from src.interfaces.middleware.error_handler import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        background = getattr(app.state, "background", None)
        if background is not None and background.pending:
            logger.info("Waiting for %d background notification(s)", background.pending)
            await background.drain()
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    email_service: EmailService | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Membership Requests API",
        version="0.1.0",
        description="Organisation info update requests and member records",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.email_service = email_service or build_email_service(settings)
    app.state.email_renderer = EmailTemplateRenderer.create_default()
    app.state.background = BackgroundNotifier()
    app.state.request_notifier = RequestNotifier(
        email_service=app.state.email_service,
        renderer=app.state.email_renderer,
        settings=settings,
        background=app.state.background,
    )
    if not settings.admin_email:
        logger.warning("ADMIN_EMAIL not configured - admin notification emails are disabled")
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix=settings.api_prefix)
    api.include_router(requests_router.router)
    api.include_router(members_router.router)

    @api.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api)

    # Add the API key check first, then CORS last so CORS runs outermost and can handle preflight
    app.add_middleware(ApiKeyMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
