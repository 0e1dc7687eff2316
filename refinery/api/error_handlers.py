"""Error Handlers: map Refinery failures onto the HTTP error envelope.

Invariants:
    - RefineryError -> its own http_status with to_response() as the body
    - DerivationError is not logged here: run_derivation already logged it, once
    - Other client-side Refinery errors log at WARNING, engine failures at ERROR,
      both carrying the type context (type_name, strategy, location) as extras
    - RequestValidationError -> 400 with field-level details
    - Exception (catch-all) -> 500 INTERNAL_ERROR, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from refinery.core.errors import (
    DerivationError,
    ErrorCategory,
    ErrorSeverity,
    RefineryError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(RefineryError, refinery_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)


def _envelope(code: str, message: str, category: ErrorCategory,
              severity: ErrorSeverity, **fields) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **fields,
        },
    }


async def refinery_error_handler(request: Request, exc: RefineryError):
    if not isinstance(exc, DerivationError):
        level = logging.WARNING if exc.is_client_error else logging.ERROR
        logger.log(
            level, f"{exc.code} on {request.url.path}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                **exc.context.log_extra(),
            },
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(
        f"Invalid request body on {request.url.path}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def generic_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
