"""AlertType repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from cdcp.domain.reference.entities.alert_type import AlertType


class AlertTypeRepository(ABC):
    """Read-only repository for alert types."""

    @abstractmethod
    async def find_by_id(self, alert_type_id: str) -> Optional[AlertType]:
        """Find an alert type by its ID."""

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[AlertType]:
        """Find an alert type by its code."""

    @abstractmethod
    async def list_all(self) -> list[AlertType]:
        """List all alert types ordered by code."""
