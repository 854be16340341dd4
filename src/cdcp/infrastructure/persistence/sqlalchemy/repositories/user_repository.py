"""SQLAlchemy implementation of UserRepository."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cdcp.domain.reference import AlertType, Language
from cdcp.domain.shared.time import ensure_tz_aware
from cdcp.domain.user import (
    ConfirmationCode,
    EmailAlreadyExistsError,
    Subscription,
    SubscriptionAlreadyExistsError,
    User,
    UserAttribute,
    UserRepository,
)
from cdcp.infrastructure.persistence.sqlalchemy.models import (
    AlertTypeModel,
    ConfirmationCodeModel,
    LanguageModel,
    SubscriptionModel,
    UserAttributeModel,
    UserModel,
)

logger = logging.getLogger(__name__)

# Unique constraint names (PostgreSQL) and column lists (SQLite)
_EMAIL_CONSTRAINT_MARKERS = ("ix_users_email", "users.email")
_SUBSCRIPTION_CONSTRAINT_MARKERS = (
    "uq_subscription_user_alert",
    "subscriptions.user_id, subscriptions.alert_type_id",
)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: str) -> Optional[User]:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(self, email: str) -> Optional[User]:
        stmt = self._base_query().where(UserModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_confirmation_codes(self, user_id: str) -> list[ConfirmationCode]:
        stmt = (
            select(ConfirmationCodeModel)
            .where(ConfirmationCodeModel.user_id == user_id)
            .order_by(ConfirmationCodeModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._map_code_to_domain(m) for m in result.scalars().all()]

    async def save(self, user: User) -> None:
        existing = await self._find_model_by_id(user.id)
        stored_subscriptions = (
            {m.id for m in existing.subscriptions} if existing else set()
        )

        try:
            if existing:
                await self._update_model(existing, user)
                logger.debug("Updated user: %s", user.id)
            else:
                model = await self._map_to_model(user)
                self._session.add(model)
                logger.info("Created user: %s", user.id)

            await self._session.flush()
        except IntegrityError as e:
            # Only the driver message names the constraint; str(e) also holds the SQL
            detail = str(e.orig).lower()
            if user.email and any(m in detail for m in _EMAIL_CONSTRAINT_MARKERS):
                raise EmailAlreadyExistsError(user.email) from e
            if any(m in detail for m in _SUBSCRIPTION_CONSTRAINT_MARKERS):
                added = [
                    s for s in user.subscriptions if s.id not in stored_subscriptions
                ]
                alert_type_code = added[0].alert_type.code if added else "unknown"
                logger.info(
                    "Concurrent subscription to %s for user %s",
                    alert_type_code,
                    user.id,
                )
                raise SubscriptionAlreadyExistsError(user.id, alert_type_code) from e
            raise

    async def delete(self, user_id: str) -> None:
        model = await self._find_model_by_id(user_id)

        if model:
            await self._session.delete(model)
            await self._session.flush()
            logger.info("Deleted user: %s", user_id)

    async def delete_expired_confirmation_codes(self, now: datetime) -> int:
        # Bulk delete; aggregates already loaded in this session are not refreshed
        stmt = (
            delete(ConfirmationCodeModel)
            .where(ConfirmationCodeModel.expiry_date < now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore

    def _base_query(self):
        return select(UserModel).options(
            selectinload(UserModel.confirmation_codes),
            selectinload(UserModel.subscriptions),
            selectinload(UserModel.attributes),
        )

    async def _find_model_by_id(self, user_id: str) -> Optional[UserModel]:
        stmt = self._base_query().where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            email_verified=model.email_verified,
            confirmation_codes=[
                self._map_code_to_domain(m) for m in model.confirmation_codes
            ],
            subscriptions=[
                self._map_subscription_to_domain(m) for m in model.subscriptions
            ],
            attributes=[
                UserAttribute(name=m.name, value=m.value) for m in model.attributes
            ],
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    @staticmethod
    def _map_code_to_domain(model: ConfirmationCodeModel) -> ConfirmationCode:
        return ConfirmationCode(
            id=model.id,
            user_id=model.user_id,
            email=model.email,
            code=model.code,
            expiry_date=ensure_tz_aware(model.expiry_date),
            created_at=ensure_tz_aware(model.created_at),
        )

    @staticmethod
    def _map_subscription_to_domain(model: SubscriptionModel) -> Subscription:
        alert_type = model.alert_type
        language = model.language
        return Subscription(
            id=model.id,
            user_id=model.user_id,
            alert_type=AlertType(
                id=alert_type.id,
                code=alert_type.code,
                description=alert_type.description,
            ),
            language=Language(
                id=language.id,
                code=language.code,
                description=language.description,
                iso_code=language.iso_code,
                ms_locale_code=language.ms_locale_code,
            ),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    async def _map_to_model(self, user: User) -> UserModel:
        model = UserModel(
            id=user.id,
            email=user.email,
            email_verified=user.email_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
            confirmation_codes=[],
            subscriptions=[],
            attributes=[],
        )
        await self._sync_children(model, user)
        return model

    async def _update_model(self, model: UserModel, user: User) -> None:
        model.email = user.email
        model.email_verified = user.email_verified
        model.updated_at = user.updated_at
        await self._sync_children(model, user)

    async def _sync_children(self, model: UserModel, user: User) -> None:
        """Bring the owned collections of ``model`` in line with ``user``.

        Rows are matched by id; rows missing from the aggregate are removed
        through the delete-orphan cascade.
        """
        # Confirmation codes are immutable once issued
        code_ids = {c.id for c in user.confirmation_codes}
        known_codes = {m.id for m in model.confirmation_codes}
        model.confirmation_codes[:] = [
            m for m in model.confirmation_codes if m.id in code_ids
        ]
        for code in user.confirmation_codes:
            if code.id not in known_codes:
                model.confirmation_codes.append(
                    ConfirmationCodeModel(
                        id=code.id,
                        user_id=user.id,
                        email=code.email,
                        code=code.code,
                        expiry_date=code.expiry_date,
                        created_at=code.created_at,
                    ),
                )

        # Subscriptions
        by_id = {m.id: m for m in model.subscriptions}
        synced: list[SubscriptionModel] = []
        for subscription in user.subscriptions:
            sub_model = by_id.get(subscription.id)
            if sub_model is None:
                sub_model = SubscriptionModel(
                    id=subscription.id,
                    user_id=user.id,
                    alert_type=await self._alert_type_model(subscription.alert_type),
                    language=await self._language_model(subscription.language),
                    created_at=subscription.created_at,
                    updated_at=subscription.updated_at,
                )
            elif sub_model.language_id != subscription.language.id:
                sub_model.language = await self._language_model(subscription.language)
                sub_model.updated_at = subscription.updated_at
            synced.append(sub_model)
        model.subscriptions[:] = synced

        # Attributes have no identity of their own; replace them wholesale
        model.attributes[:] = [
            UserAttributeModel(
                user_id=user.id,
                position=position,
                name=attribute.name,
                value=attribute.value,
            )
            for position, attribute in enumerate(user.attributes)
        ]

    async def _alert_type_model(self, alert_type: AlertType) -> AlertTypeModel:
        model = await self._session.get(AlertTypeModel, alert_type.id)
        if model is None:
            msg = f"Alert type {alert_type.id} is not persisted"
            raise ValueError(msg)
        return model

    async def _language_model(self, language: Language) -> LanguageModel:
        model = await self._session.get(LanguageModel, language.id)
        if model is None:
            msg = f"Language {language.id} is not persisted"
            raise ValueError(msg)
        return model
