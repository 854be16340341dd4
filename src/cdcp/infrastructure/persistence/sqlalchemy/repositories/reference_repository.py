"""SQLAlchemy implementations of the reference data repositories."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cdcp.domain.reference import (
    AlertType,
    AlertTypeRepository,
    Language,
    LanguageRepository,
)
from cdcp.infrastructure.persistence.sqlalchemy.models import (
    AlertTypeModel,
    LanguageModel,
)


class AlertTypeRepositorySQLAlchemy(AlertTypeRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_id(self, alert_type_id: str) -> Optional[AlertType]:
        model = await self._session.get(AlertTypeModel, alert_type_id)
        return self._map_to_domain(model) if model else None

    async def find_by_code(self, code: str) -> Optional[AlertType]:
        stmt = select(AlertTypeModel).where(AlertTypeModel.code == code)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def list_all(self) -> list[AlertType]:
        stmt = select(AlertTypeModel).order_by(AlertTypeModel.code)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    @staticmethod
    def _map_to_domain(model: AlertTypeModel) -> AlertType:
        return AlertType(id=model.id, code=model.code, description=model.description)


class LanguageRepositorySQLAlchemy(LanguageRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_id(self, language_id: str) -> Optional[Language]:
        model = await self._session.get(LanguageModel, language_id)
        return self._map_to_domain(model) if model else None

    async def find_by_code(self, code: str) -> Optional[Language]:
        return await self._find_one(LanguageModel.code == code)

    async def find_by_ms_locale_code(self, ms_locale_code: str) -> Optional[Language]:
        return await self._find_one(LanguageModel.ms_locale_code == ms_locale_code)

    async def list_all(self) -> list[Language]:
        stmt = select(LanguageModel).order_by(LanguageModel.code)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def _find_one(self, condition) -> Optional[Language]:
        result = await self._session.execute(select(LanguageModel).where(condition))
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    @staticmethod
    def _map_to_domain(model: LanguageModel) -> Language:
        return Language(
            id=model.id,
            code=model.code,
            description=model.description,
            iso_code=model.iso_code,
            ms_locale_code=model.ms_locale_code,
        )
