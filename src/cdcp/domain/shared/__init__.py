"""Shared domain building blocks."""

from cdcp.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    FieldError,
    MalformedPatchError,
    UnsupportedMediaTypeError,
    ValidationError,
    ValidationFailure,
)
from cdcp.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "FieldError",
    "MalformedPatchError",
    "UnsupportedMediaTypeError",
    "ValidationError",
    "ValidationFailure",
    "ensure_tz_aware",
    "utc_now",
]
