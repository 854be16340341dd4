"""SQLAlchemy implementation of AuditEventRepository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cdcp.application.ports.audit import AuditEvent, AuditEventRepository
from cdcp.domain.shared.time import ensure_tz_aware
from cdcp.infrastructure.persistence.sqlalchemy.models import AuditEventModel


class AuditEventRepositorySQLAlchemy(AuditEventRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, event: AuditEvent) -> None:
        self._session.add(
            AuditEventModel(
                id=event.id,
                actor=event.actor,
                description=event.description,
                event_type=event.event_type,
                source=event.source,
                payload=dict(event.payload),
                created_at=event.created_at,
            ),
        )
        await self._session.flush()

    async def list_recent(self, limit: int = 100) -> list[AuditEvent]:
        stmt = (
            select(AuditEventModel)
            .order_by(AuditEventModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [
            AuditEvent(
                id=m.id,
                actor=m.actor,
                description=m.description,
                event_type=m.event_type,
                source=m.source,
                payload=dict(m.payload or {}),
                created_at=ensure_tz_aware(m.created_at),
            )
            for m in result.scalars().all()
        ]
