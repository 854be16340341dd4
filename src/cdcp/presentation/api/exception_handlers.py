"""Exception to HTTP response mapping.

Every error body has the shape::

    {"detail": "...", "code": "ERROR_CODE", "errors": [{"field": ..., "message": ...}]}

``errors`` is only present for validation failures.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cdcp.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    FieldError,
    ValidationError,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MALFORMED_PATCH: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SUBSCRIPTION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ALERT_TYPE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.LANGUAGE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.SUBSCRIPTION_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.UNSUPPORTED_MEDIA_TYPE: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Used when an exception carries a code missing from STATUS_BY_CODE
STATUS_BY_CATEGORY: list[tuple[type[DomainException], int]] = [
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
]


def status_for(exc: DomainException) -> int:
    if exc.code in STATUS_BY_CODE:
        return STATUS_BY_CODE[exc.code]
    for category, status_code in STATUS_BY_CATEGORY:
        if isinstance(exc, category):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _error_body(
    message: str,
    code: ErrorCode,
    errors: list[FieldError] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"detail": message, "code": code.value}
    if errors is not None:
        body["errors"] = [{"field": e.field, "message": e.message} for e in errors]
    return body


def _binding_errors(exc: RequestValidationError) -> list[FieldError]:
    """Flatten pydantic binding errors into field errors.

    The first ``loc`` segment names the request part (body, path, query)
    and is dropped.
    """
    errors = []
    for detail in exc.errors():
        loc = [str(part) for part in detail.get("loc", ())][1:]
        errors.append(FieldError(".".join(loc) or "__root__", detail.get("msg", "")))
    return errors


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application."""

    @app.exception_handler(ValidationFailure)
    async def validation_failure_handler(
        request: Request,
        exc: ValidationFailure,
    ) -> JSONResponse:
        logger.info(
            "Validation failed on %s %s: %s",
            request.method,
            request.url.path,
            exc.fields,
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(exc.message, exc.code, exc.errors),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = _binding_errors(exc)
        logger.info(
            "Invalid request on %s %s: %s",
            request.method,
            request.url.path,
            [e.field for e in errors],
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(
                "Validation failed",
                ErrorCode.VALIDATION_ERROR,
                errors,
            ),
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        logger.warning(
            "%s on %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
            extra={"details": exc.details},
        )
        return JSONResponse(
            status_code=status_for(exc),
            content=_error_body(exc.message, exc.code),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        # Internals stay in the log; the client gets a generic body
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                "An internal error occurred",
                ErrorCode.INTERNAL_ERROR,
            ),
        )
