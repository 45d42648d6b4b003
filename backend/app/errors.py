"""Mapping of domain errors onto HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ops_dashboard.documents.i18n import error_message, is_supported, normalize_language
from ops_dashboard.errors import (
    AuthenticationFailed,
    Conflict,
    DataFetchError,
    NotFound,
    OpsDashboardError,
    RenderError,
    ValidationFailed,
)
from ops_dashboard.logging_config import get_logger

from .config import get_settings

logger = get_logger(__name__)

STATUS_CODES = {
    ValidationFailed: 422,
    AuthenticationFailed: 401,
    NotFound: 404,
    Conflict: 409,
    DataFetchError: 502,
    RenderError: 500,
}


def status_for(exc: OpsDashboardError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_CODES:
            return STATUS_CODES[error_type]
    return 500


def request_language(request: Request) -> str:
    """First language of ``Accept-Language`` we support, else the configured default."""
    default = get_settings().default_language
    header = request.headers.get("accept-language", "")
    for part in header.split(","):
        tag = part.split(";")[0].strip()
        if is_supported(tag):
            return normalize_language(tag)
    return default


async def handle_domain_error(request: Request, exc: OpsDashboardError) -> JSONResponse:
    status_code = status_for(exc)
    language = request_language(request)
    content = {"detail": error_message(language, exc.code), "code": exc.code}
    if isinstance(exc, ValidationFailed):
        content["errors"] = exc.errors
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(status_code=status_code, content=content)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OpsDashboardError, handle_domain_error)
