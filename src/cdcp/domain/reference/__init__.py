"""Reference data domain layer exports."""

from cdcp.domain.reference.entities import AlertType, Language
from cdcp.domain.reference.exceptions import (
    AlertTypeNotFoundError,
    LanguageNotFoundError,
)
from cdcp.domain.reference.repositories import (
    AlertTypeRepository,
    LanguageRepository,
)

__all__ = [
    # Entities
    "AlertType",
    "Language",
    # Exceptions
    "AlertTypeNotFoundError",
    "LanguageNotFoundError",
    # Repository Interfaces
    "AlertTypeRepository",
    "LanguageRepository",
]
