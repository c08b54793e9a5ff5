"""HTTP exception handlers.

Domain exceptions are turned into JSON responses shaped as
``{"error": <message>, "code": <error_code>}``. Each exception class carries
its own ``http_status_code`` and ``error_code``.
"""

from html import escape

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from todaybrief.core.domain.exceptions import (
    DomainException,
    PersistenceError,
    UpstreamAuthError,
)


def _error_body(message: str, code: str) -> dict[str, str]:
    return {"error": message, "code": code}


async def domain_exception_handler(
    _request: Request, exc: DomainException
) -> JSONResponse:
    """Handle domain exceptions using the class-level status and code."""
    status_code = getattr(exc, "http_status_code", 400)
    error_code = getattr(exc, "error_code", "DOMAIN_ERROR")
    if status_code >= 500:
        logger.warning(f"{type(exc).__name__}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.message, error_code),
    )


async def upstream_auth_exception_handler(
    _request: Request, exc: UpstreamAuthError
) -> HTMLResponse:
    """OAuth failures land in a browser tab, so they are rendered as HTML."""
    logger.warning(f"Kakao flow failed: {exc.message}")
    return HTMLResponse(
        status_code=exc.http_status_code,
        content=(
            "<!doctype html><html><head><meta charset='utf-8'></head><body>"
            "<h2>카카오 로그인 오류</h2>"
            f"<p>{escape(exc.message)}</p>"
            "</body></html>"
        ),
    )


async def request_validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map body/query validation failures to 400 with a short message."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location or 'request'}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(message, "VALIDATION_ERROR"),
    )


async def sqlalchemy_exception_handler(
    _request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Database failures; the request transaction has already been rolled back."""
    logger.opt(exception=exc).error(f"Database error: {exc}")
    error = PersistenceError()
    return JSONResponse(
        status_code=error.http_status_code,
        content=_error_body(error.message, error.error_code),
    )


async def global_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("서버 내부 오류가 발생했습니다.", "INTERNAL_ERROR"),
    )
