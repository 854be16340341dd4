"""Audit sink port."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from cdcp.domain.shared.time import utc_now


@dataclass(frozen=True)
class AuditEvent:
    """An append-only record of something that happened."""

    actor: str
    description: str
    event_type: str
    source: str
    payload: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=utc_now)


class AuditSink(ABC):
    """Destination for audit events.

    ``record`` must return immediately; persisting the event is the sink's
    concern and must never affect the caller.
    """

    @abstractmethod
    def record(  # NOQA: PLR0913
        self,
        actor: str,
        description: str,
        payload: dict[str, Any] | None = None,
        event_type: str = "",
        source: str = "",
    ) -> None:
        """Queue an audit event for persistence."""


class AuditEventRepository(ABC):
    """Append-only storage for audit events."""

    @abstractmethod
    async def add(self, event: AuditEvent) -> None:
        """Persist an audit event."""

    @abstractmethod
    async def list_recent(self, limit: int = 100) -> list[AuditEvent]:
        """Return the most recent events, newest first."""
