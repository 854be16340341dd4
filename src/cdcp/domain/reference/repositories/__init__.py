"""Reference data repository interfaces."""

from cdcp.domain.reference.repositories.alert_type_repository import (
    AlertTypeRepository,
)
from cdcp.domain.reference.repositories.language_repository import (
    LanguageRepository,
)

__all__ = ["AlertTypeRepository", "LanguageRepository"]
