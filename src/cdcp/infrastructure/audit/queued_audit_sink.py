"""Audit sink backed by a bounded in-memory queue.

``record`` never waits: events are put on an ``asyncio.Queue`` and a
single worker task writes them to the database in their own session.
When the queue is full the event is dropped and a warning is logged.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cdcp.application.ports.audit import (
    AuditEvent,
    AuditEventRepository,
    AuditSink,
)
from cdcp.infrastructure.persistence.sqlalchemy.repositories import (
    AuditEventRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 1000
DEFAULT_DRAIN_TIMEOUT = 5.0


class QueuedAuditSink(AuditSink):
    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        max_size: int = DEFAULT_QUEUE_SIZE,
        repository_factory: Callable[
            [AsyncSession], AuditEventRepository
        ] = AuditEventRepositorySQLAlchemy,
    ):
        self._session_maker = session_maker
        self._repository_factory = repository_factory
        self._queue: asyncio.Queue[AuditEvent] = asyncio.Queue(maxsize=max_size)
        self._worker: Optional[asyncio.Task] = None
        self._dropped = 0

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    @property
    def dropped(self) -> int:
        return self._dropped

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def record(  # NOQA: PLR0913
        self,
        actor: str,
        description: str,
        payload: dict[str, Any] | None = None,
        event_type: str = "",
        source: str = "",
    ) -> None:
        event = AuditEvent(
            actor=actor,
            description=description,
            event_type=event_type,
            source=source,
            payload=dict(payload or {}),
        )
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self._dropped += 1
            logger.warning(
                "Audit queue full; dropped event %s (%s)",
                event.event_type or "-",
                event.description,
            )

    def start(self) -> None:
        if self.running:
            return
        self._worker = asyncio.create_task(self._run(), name="audit-worker")
        logger.info("Audit worker started")

    async def stop(self, drain_timeout: float = DEFAULT_DRAIN_TIMEOUT) -> None:
        """Flush queued events (bounded by ``drain_timeout``) and stop."""
        if self._worker is None:
            return

        try:
            await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Audit queue not drained within %.1fs; %d event(s) lost",
                drain_timeout,
                self._queue.qsize(),
            )

        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        logger.info("Audit worker stopped")

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._persist(event)
            except Exception:
                logger.exception("Failed to persist audit event %s", event.id)
            finally:
                self._queue.task_done()

    async def _persist(self, event: AuditEvent) -> None:
        async with self._session_maker() as session:
            await self._repository_factory(session).add(event)
            await session.commit()
