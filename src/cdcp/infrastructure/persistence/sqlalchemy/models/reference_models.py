"""SQLAlchemy models for reference data (alert types and languages)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cdcp.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class AlertTypeModel(Base, TimestampMixin):
    __tablename__ = "alert_types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<AlertTypeModel(id={self.id}, code={self.code})>"


class LanguageModel(Base, TimestampMixin):
    __tablename__ = "languages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    iso_code: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        comment="ISO 639-3 language code",
    )
    ms_locale_code: Mapped[str] = mapped_column(
        String(10),
        unique=True,
        nullable=False,
        index=True,
        comment="Microsoft locale code, e.g. en-CA",
    )

    def __repr__(self) -> str:
        return f"<LanguageModel(id={self.id}, ms_locale_code={self.ms_locale_code})>"
