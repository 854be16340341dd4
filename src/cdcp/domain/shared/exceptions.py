"""Error taxonomy shared by every layer.

Each exception carries an ``ErrorCode``; the API maps codes to HTTP
statuses in one table, so new exceptions only pick a code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Iterable


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in API error bodies."""

    # 400
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MALFORMED_PATCH = "MALFORMED_PATCH"

    # 404
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    SUBSCRIPTION_NOT_FOUND = "SUBSCRIPTION_NOT_FOUND"
    ALERT_TYPE_NOT_FOUND = "ALERT_TYPE_NOT_FOUND"
    LANGUAGE_NOT_FOUND = "LANGUAGE_NOT_FOUND"

    # 409
    CONFLICT = "CONFLICT"
    SUBSCRIPTION_ALREADY_EXISTS = "SUBSCRIPTION_ALREADY_EXISTS"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"

    # 415
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Root of all expected, caller-actionable failures.

    Attributes
    ----------
    message
        Text returned to API clients
    code
        Error code; ``default_code`` of the class unless given
    details
        Extra context for logs, never sent to clients
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code.value!r})"


class ValidationError(DomainException):
    default_code = ErrorCode.VALIDATION_ERROR


class EntityNotFoundError(DomainException):
    default_code = ErrorCode.ENTITY_NOT_FOUND


class ConflictError(DomainException):
    default_code = ErrorCode.CONFLICT


@dataclass(frozen=True)
class FieldError:
    """A single rule violation against one field of an object."""

    field: str
    message: str


class ValidationFailure(ValidationError):
    """One or more field-level rule violations, reported together."""

    def __init__(
        self,
        errors: Iterable[FieldError],
        message: str = "Validation failed",
    ) -> None:
        self.errors = list(errors)
        if not self.errors:
            msg = "ValidationFailure requires at least one field error"
            raise ValueError(msg)
        super().__init__(
            message,
            details={"errors": [(e.field, e.message) for e in self.errors]},
        )

    @property
    def fields(self) -> list[str]:
        return [error.field for error in self.errors]


class MalformedPatchError(ValidationError):
    """The patch document could not be parsed or applied."""

    default_code = ErrorCode.MALFORMED_PATCH


class UnsupportedMediaTypeError(DomainException):
    default_code = ErrorCode.UNSUPPORTED_MEDIA_TYPE

    def __init__(self, content_type: str | None) -> None:
        self.content_type = content_type
        super().__init__(f"Unsupported media type [{content_type}]")
