"""SQLAlchemy repository implementations."""

from cdcp.infrastructure.persistence.sqlalchemy.repositories.audit_event_repository import (  # NOQA: E501
    AuditEventRepositorySQLAlchemy,
)
from cdcp.infrastructure.persistence.sqlalchemy.repositories.reference_repository import (  # NOQA: E501
    AlertTypeRepositorySQLAlchemy,
    LanguageRepositorySQLAlchemy,
)
from cdcp.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "AlertTypeRepositorySQLAlchemy",
    "AuditEventRepositorySQLAlchemy",
    "LanguageRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
