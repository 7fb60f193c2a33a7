"""Error Handlers — global exception handlers for the reachq API.

Invariants:
    - ReachqError → structured JSON with error code, message, severity, field context
    - RequestValidationError → details keyed by camelCase request field ("headers.dstPorts")
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (ReachqError), validation (Pydantic), catch-all (Exception)
    - Kept out of main.py so the app factory stays a short list of registrations
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from reachq.core.errors import ErrorCategory, ErrorSeverity, ReachqError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_reachq_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_reachq_error_handler(app: FastAPI) -> None:
    """Register resolution/infrastructure error handler."""

    @app.exception_handler(ReachqError)
    async def reachq_error_handler(request: Request, exc: ReachqError):
        """Handle all reachq domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"ReachqError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "field": exc.context.field,
                "expression": exc.context.expression,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register request schema error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Reject a query body that does not match the query schema."""
        details = _validation_details(exc)
        logger.warning(
            f"Malformed query on {request.url.path}: "
            f"{', '.join(d['field'] for d in details)}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Query does not match the reachability schema",
                    "category": ErrorCategory.VALIDATION.value,
                    "severity": ErrorSeverity.ERROR.value,
                    "details": details,
                },
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all. The response never carries the exception text."""
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.url.path}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "Query resolution failed unexpectedly",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def request_field_name(loc: tuple) -> str:
    """Render a pydantic error location the way InvalidSpecifierError names fields.

    ("body", "pathConstraints", "startLocation") -> "pathConstraints.startLocation".
    List indices stay in brackets: ("body", "headers", "tcpFlags", 0, "syn")
    -> "headers.tcpFlags[0].syn". An error on the whole body is "body".
    """
    parts = list(loc[1:]) if loc and loc[0] == "body" else list(loc)
    if not parts:
        return "body"
    name = ""
    for part in parts:
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name += f".{part}" if name else str(part)
    return name


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": request_field_name(tuple(e["loc"])),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
