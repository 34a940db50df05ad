from __future__ import annotations

import secrets
from typing import Iterable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from src.application.errors import AuthError
from src.config.settings import Settings

PUBLIC_SUFFIXES: Iterable[str] = ("/health",)
PUBLIC_PATHS: Iterable[str] = ("/docs", "/openapi.json", "/redoc")


class ApiKeyMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    def _is_public(self, path: str) -> bool:
        if any(path.startswith(p) for p in PUBLIC_PATHS):
            return True
        return any(path == f"{self.settings.api_prefix}{s}" for s in PUBLIC_SUFFIXES)

    async def dispatch(self, request: Request, call_next) -> Response:
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS" or self._is_public(request.url.path):
            return await call_next(request)
        try:
            provided = request.headers.get(self.settings.api_key_header)
            if not provided:
                raise AuthError("Missing API key")
            expected = self.settings.api_key.get_secret_value()
            if not secrets.compare_digest(provided.encode(), expected.encode()):
                raise AuthError("Invalid API key")
        except AuthError as exc:
            return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
        return await call_next(request)
