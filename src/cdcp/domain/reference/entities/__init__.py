"""Reference data entities."""

from cdcp.domain.reference.entities.alert_type import AlertType
from cdcp.domain.reference.entities.language import Language

__all__ = ["AlertType", "Language"]
