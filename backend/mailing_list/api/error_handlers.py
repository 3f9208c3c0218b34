"""Error Handlers: global exception handlers for the REST front-end.

Invariants:
    - MailingListError → error.http_status with the shared to_response() envelope
    - Validation and conflict errors log at WARNING; persistence and internal at ERROR
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (MailingListError), validation (Pydantic), catch-all (Exception)
    - Routes raise ServiceResult.unwrap() errors straight into this layer
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from mailing_list.core.errors import ErrorCategory, ErrorSeverity, MailingListError

logger = logging.getLogger(__name__)

# caller mistakes: expected traffic, not service faults
CLIENT_ERROR_CATEGORIES = frozenset({ErrorCategory.VALIDATION, ErrorCategory.CONFLICT})


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register mailing-list domain/infrastructure error handler."""

    @app.exception_handler(MailingListError)
    async def mailing_list_error_handler(request: Request, exc: MailingListError):
        """Handle all mailing-list domain/infrastructure errors."""
        logger.log(
            domain_error_log_level(exc),
            f"MailingListError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def domain_error_log_level(exc: MailingListError) -> int:
    """WARNING for client-category errors, ERROR for everything else."""
    if exc.category in CLIENT_ERROR_CATEGORIES:
        return logging.WARNING
    return logging.ERROR


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
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
