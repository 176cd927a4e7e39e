"""Error Handlers — global exception handlers for the States API.

Invariants:
    - StatesAPIError → {"error": <message>} with the error's http_status
    - RequestValidationError → 400 {"error": "<field>: <message>"}
    - Unmatched routes and unsupported methods (404, 405) → a 404 whose body is HTML,
      JSON or plain text chosen from the Accept header
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Four handlers registered from one function: main.py stays a wiring file
    - Client-side errors log at WARNING, infrastructure errors at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from states_api.core.errors import ErrorSeverity, StatesAPIError

logger = logging.getLogger(__name__)

NOT_FOUND_TEXT = "404 Not Found"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_states_error_handler(app)
    _register_validation_error_handler(app)
    _register_not_found_handler(app)
    _register_generic_error_handler(app)


def _register_states_error_handler(app: FastAPI) -> None:
    """Register States API domain/infrastructure error handler."""

    @app.exception_handler(StatesAPIError)
    async def states_error_handler(request: Request, exc: StatesAPIError):
        """Handle all States API domain/infrastructure errors."""
        extra = {**exc.log_extra(), "path": request.url.path}
        if exc.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING):
            logger.warning(f"StatesAPIError: {exc.message}", extra=extra)
        else:
            logger.error(
                f"StatesAPIError: {exc.message} {exc.context.debug_info}",
                extra=extra,
            )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)},
        )


def _register_not_found_handler(app: FastAPI) -> None:
    """Register content-negotiated 404 handler for unmatched routes and methods."""

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        """Unmatched paths and methods get a negotiated 404; other codes keep the default."""
        if exc.status_code not in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return await http_exception_handler(request, exc)
        return negotiate_not_found(request.headers.get("accept"))


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Server Error"},
        )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request data"
    first = errors[0]
    location = ".".join(str(loc) for loc in first["loc"] if loc != "body")
    return f"{location}: {first['msg']}" if location else first["msg"]


def accepts(accept_header: str | None, media_type: str) -> bool:
    """True when media_type is acceptable (q > 0) under the Accept header.

    A missing or empty header accepts everything.
    """
    if not accept_header or not accept_header.strip():
        return True
    want_type, _, want_sub = media_type.partition("/")
    for part in accept_header.split(","):
        media, *params = [p.strip() for p in part.split(";")]
        if not media:
            continue
        m_type, _, m_sub = media.lower().partition("/")
        if m_type not in ("*", want_type) or m_sub not in ("*", want_sub, ""):
            continue
        if _quality(params) > 0:
            return True
    return False


def _quality(params: list[str]) -> float:
    for param in params:
        key, _, value = param.partition("=")
        if key.strip().lower() == "q":
            try:
                return float(value)
            except ValueError:
                return 0.0
    return 1.0


def negotiate_not_found(accept_header: str | None):
    """HTML first, then JSON, then plain text, in that preference order."""
    if accepts(accept_header, "text/html"):
        return HTMLResponse(
            f"<h1>{NOT_FOUND_TEXT}</h1>", status_code=status.HTTP_404_NOT_FOUND,
        )
    if accepts(accept_header, "application/json"):
        return JSONResponse(
            {"error": NOT_FOUND_TEXT}, status_code=status.HTTP_404_NOT_FOUND,
        )
    return PlainTextResponse(NOT_FOUND_TEXT, status_code=status.HTTP_404_NOT_FOUND)
