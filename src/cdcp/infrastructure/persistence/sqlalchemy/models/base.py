"""Declarative base and shared columns of the notification schema."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from cdcp.domain.shared.time import utc_now


class Base(DeclarativeBase):
    """Registry of every table owned by the notification service.

    ``init_db.create_tables`` and the test fixtures build the schema from
    ``Base.metadata``, so each model module must be imported through
    ``models/__init__`` before that happens.
    """


class TimestampMixin:
    """``created_at``/``updated_at`` columns stored with their UTC offset."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
