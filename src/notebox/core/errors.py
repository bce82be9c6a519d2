"""
Error taxonomy and the JSON error handlers that render it.

Services raise ``NoteboxError`` subclasses; the handlers registered by
``register_exception_handlers`` turn them into ``{success: false, statusCode, error, message}``
responses with the matching status code.
"""

import traceback
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import get_settings
from .logging import get_logger

logger = get_logger("errors")


class ErrorKind(str, Enum):
    """Failure categories shared by the server and the API client."""

    VALIDATION = "validation_error"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    DUPLICATE_EMAIL = "duplicate_email"
    INTERNAL = "internal_error"
    # client side only: the request never produced an HTTP response
    TRANSPORT = "transport_error"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def kind_for_status(status_code: int) -> ErrorKind:
    """Best-effort mapping from an HTTP status to an error kind."""
    for kind, code in STATUS_BY_KIND.items():
        if code == status_code:
            return kind
    if 400 <= status_code < 500:
        return ErrorKind.VALIDATION
    return ErrorKind.INTERNAL


class NoteboxError(Exception):
    """Base class for errors reported to API callers."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(NoteboxError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid request"


class Unauthenticated(NoteboxError):
    """Missing, invalid or expired session.

    ``clear_session`` asks the handler to drop the stale session cookie.
    """

    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Not authenticated"

    def __init__(self, message: Optional[str] = None, clear_session: bool = False):
        super().__init__(message)
        self.clear_session = clear_session


class Forbidden(NoteboxError):
    kind = ErrorKind.FORBIDDEN
    default_message = "You are not allowed to access this resource"


class NotFound(NoteboxError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class DuplicateEmail(NoteboxError):
    kind = ErrorKind.DUPLICATE_EMAIL
    default_message = "Email already registered"


class InternalError(NoteboxError):
    kind = ErrorKind.INTERNAL


def error_body(
    kind: ErrorKind, message: str, status_code: Optional[int] = None, **extra: Any
) -> Dict[str, Any]:
    """``{success, statusCode, error, message}`` plus any extra fields."""
    body = {
        "success": False,
        "statusCode": status_code or STATUS_BY_KIND[kind],
        "error": kind.value,
        "message": message,
    }
    body.update(extra)
    return body


def internal_error_body(exc: Exception) -> Dict[str, Any]:
    """500 body; exception text and traceback only outside production."""
    if get_settings().is_production:
        return error_body(ErrorKind.INTERNAL, "Internal server error")
    return error_body(
        ErrorKind.INTERNAL,
        "Internal server error",
        detail=f"{type(exc).__name__}: {exc}",
        stack=traceback.format_exception(type(exc), exc, exc.__traceback__),
    )


def clear_session_cookie(response, settings=None) -> None:
    """Expire the session cookie on the given response."""
    settings = settings or get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        domain=settings.cookie_domain,
        secure=settings.cookie_secure,
        httponly=True,
        samesite=settings.cookie_samesite,
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Invalid request"


async def notebox_error_handler(request: Request, exc: NoteboxError) -> JSONResponse:
    if exc.kind == ErrorKind.INTERNAL:
        logger.error(
            "Internal error",
            extra={"path": request.url.path, "error_message": exc.message},
        )
    response = JSONResponse(status_code=exc.status_code, content=error_body(exc.kind, exc.message))
    if isinstance(exc, Unauthenticated) and exc.clear_session:
        clear_session_cookie(response)
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(ErrorKind.VALIDATION, _format_validation_errors(exc)),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 404 for unknown routes, 405 etc.
    kind = kind_for_status(exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(kind, str(exc.detail), status_code=exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # only reached for errors raised outside UnhandledErrorMiddleware
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=internal_error_body(exc)
    )


class UnhandledErrorMiddleware:
    """ASGI middleware turning unexpected exceptions into the JSON 500 body.

    Installed inside the CORS and logging middleware, so the 500 still
    carries ``Access-Control-Allow-Origin`` and ``X-Request-ID``.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if response_started:
                raise
            logger.error(
                "Unhandled exception",
                exc_info=exc,
                extra={"path": scope["path"], "method": scope["method"]},
            )
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=internal_error_body(exc),
            )
            await response(scope, receive, send)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NoteboxError, notebox_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
