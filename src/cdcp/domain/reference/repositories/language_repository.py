"""Language repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from cdcp.domain.reference.entities.language import Language


class LanguageRepository(ABC):
    """Read-only repository for languages."""

    @abstractmethod
    async def find_by_id(self, language_id: str) -> Optional[Language]:
        """Find a language by its ID."""

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Language]:
        """Find a language by its own code."""

    @abstractmethod
    async def find_by_ms_locale_code(self, ms_locale_code: str) -> Optional[Language]:
        """Find a language by its Microsoft locale code (e.g. ``en-CA``)."""

    @abstractmethod
    async def list_all(self) -> list[Language]:
        """List all languages ordered by code."""
