"""Read access to alert types and languages, cached in-process."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from cdcp.domain.reference import (
    AlertType,
    AlertTypeNotFoundError,
    AlertTypeRepository,
    Language,
    LanguageNotFoundError,
    LanguageRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _CachedList(Generic[T]):
    def __init__(self, ttl_seconds: float, clock: Callable[[], float]):
        self._ttl = ttl_seconds
        self._clock = clock
        self._items: Optional[list[T]] = None
        self._loaded_at = 0.0
        self._lock = asyncio.Lock()

    def _is_fresh(self) -> bool:
        return (
            self._items is not None
            and self._clock() - self._loaded_at < self._ttl
        )

    async def get(self, loader: Callable[[], Awaitable[list[T]]]) -> list[T]:
        if self._is_fresh():
            return list(self._items or [])
        async with self._lock:
            if not self._is_fresh():
                self._items = await loader()
                self._loaded_at = self._clock()
            return list(self._items or [])

    def clear(self) -> None:
        self._items = None


class ReferenceDataCache:
    """Process-wide cache of reference data.

    Reference data changes only through deployments, so every list is
    cached for ``ttl_seconds``. A TTL of 0 disables caching.
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.alert_types: _CachedList[AlertType] = _CachedList(ttl_seconds, clock)
        self.languages: _CachedList[Language] = _CachedList(ttl_seconds, clock)

    def clear(self) -> None:
        self.alert_types.clear()
        self.languages.clear()
        logger.info("Reference data cache cleared")


class ReferenceDataService:
    """Lookups for alert types and languages."""

    def __init__(
        self,
        alert_type_repository: AlertTypeRepository,
        language_repository: LanguageRepository,
        cache: ReferenceDataCache,
    ):
        self._alert_type_repo = alert_type_repository
        self._language_repo = language_repository
        self._cache = cache

    async def list_alert_types(self) -> list[AlertType]:
        return await self._cache.alert_types.get(self._alert_type_repo.list_all)

    async def get_alert_type(self, alert_type_id: str) -> AlertType:
        for alert_type in await self.list_alert_types():
            if alert_type.id == alert_type_id:
                return alert_type
        raise AlertTypeNotFoundError(alert_type_id)

    async def find_alert_type_by_code(self, code: str) -> Optional[AlertType]:
        for alert_type in await self.list_alert_types():
            if alert_type.code == code:
                return alert_type
        return None

    async def list_languages(self) -> list[Language]:
        return await self._cache.languages.get(self._language_repo.list_all)

    async def get_language(self, language_id: str) -> Language:
        for language in await self.list_languages():
            if language.id == language_id:
                return language
        raise LanguageNotFoundError(language_id)

    async def find_language_by_ms_locale_code(
        self,
        ms_locale_code: str,
    ) -> Optional[Language]:
        for language in await self.list_languages():
            if language.ms_locale_code == ms_locale_code:
                return language
        return None
