"""SQLAlchemy models for persistence layer."""

from cdcp.infrastructure.persistence.sqlalchemy.models.audit_event_model import (
    AuditEventModel,
)
from cdcp.infrastructure.persistence.sqlalchemy.models.base import Base
from cdcp.infrastructure.persistence.sqlalchemy.models.reference_models import (
    AlertTypeModel,
    LanguageModel,
)
from cdcp.infrastructure.persistence.sqlalchemy.models.user_model import (
    ConfirmationCodeModel,
    SubscriptionModel,
    UserAttributeModel,
    UserModel,
)

__all__ = [
    "Base",
    "AlertTypeModel",
    "AuditEventModel",
    "ConfirmationCodeModel",
    "LanguageModel",
    "SubscriptionModel",
    "UserAttributeModel",
    "UserModel",
]
