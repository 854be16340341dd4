"""SQLAlchemy models for the User aggregate and the rows it owns."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cdcp.domain.shared.time import utc_now
from cdcp.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from cdcp.infrastructure.persistence.sqlalchemy.models.reference_models import (
    AlertTypeModel,
    LanguageModel,
)


class UserModel(Base, TimestampMixin):
    """Database model for users.

    Codes, subscriptions and attributes are owned by the user and removed
    with it.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str | None] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
        index=True,
    )
    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    confirmation_codes: Mapped[list[ConfirmationCodeModel]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="ConfirmationCodeModel.created_at",
    )
    subscriptions: Mapped[list[SubscriptionModel]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="SubscriptionModel.created_at",
    )
    attributes: Mapped[list[UserAttributeModel]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserAttributeModel.position",
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"


class ConfirmationCodeModel(Base):
    __tablename__ = "confirmation_codes"

    __table_args__ = (Index("ix_confirmation_codes_user_id", "user_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    code: Mapped[str] = mapped_column(String(8), nullable=False)
    expiry_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    user: Mapped[UserModel] = relationship(back_populates="confirmation_codes")

    def __repr__(self) -> str:
        return f"<ConfirmationCodeModel(id={self.id}, user_id={self.user_id})>"


class SubscriptionModel(Base, TimestampMixin):
    __tablename__ = "subscriptions"

    __table_args__ = (
        UniqueConstraint("user_id", "alert_type_id", name="uq_subscription_user_alert"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    alert_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("alert_types.id"),
        nullable=False,
    )
    language_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("languages.id"),
        nullable=False,
    )

    user: Mapped[UserModel] = relationship(back_populates="subscriptions")
    alert_type: Mapped[AlertTypeModel] = relationship(lazy="joined")
    language: Mapped[LanguageModel] = relationship(lazy="joined")

    def __repr__(self) -> str:
        return (
            f"<SubscriptionModel(id={self.id}, user_id={self.user_id}, "
            f"alert_type_id={self.alert_type_id})>"
        )


class UserAttributeModel(Base):
    __tablename__ = "user_attributes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped[UserModel] = relationship(back_populates="attributes")
