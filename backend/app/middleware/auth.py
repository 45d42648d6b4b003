"""X-API-Key check for the /api routes."""

from __future__ import annotations

import hmac

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ops_dashboard.logging_config import get_logger

from ..config import get_settings

logger = get_logger(__name__)

API_KEY_HEADER = "X-API-Key"


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Reject requests without the configured API key.

    Disabled when ``API_KEY`` is unset (local development). Preflight requests
    and the public info/docs paths always pass.
    """

    PUBLIC_PATHS = {"/", "/health", "/docs", "/openapi.json", "/redoc"}

    def is_public(self, request: Request) -> bool:
        return request.method == "OPTIONS" or request.url.path in self.PUBLIC_PATHS

    async def dispatch(self, request: Request, call_next) -> Response:
        expected = get_settings().api_key
        if not expected or self.is_public(request):
            return await call_next(request)

        provided = request.headers.get(API_KEY_HEADER, "")
        if not hmac.compare_digest(provided.encode(), expected.encode()):
            logger.warning("Rejected %s %s: invalid or missing API key", request.method, request.url.path)
            return JSONResponse(status_code=401, content={"detail": "Invalid or missing API key"})

        return await call_next(request)
