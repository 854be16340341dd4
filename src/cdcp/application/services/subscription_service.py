"""Subscription use cases."""

import logging

from cdcp.application.services.reference_data_service import ReferenceDataService
from cdcp.domain.shared.exceptions import FieldError, ValidationFailure
from cdcp.domain.user import Subscription, UserNotFoundError, UserRepository

logger = logging.getLogger(__name__)

ALERT_TYPE_CODE_FIELD = "alertTypeCode"
LANGUAGE_CODE_FIELD = "msLanguageCode"

UNKNOWN_ALERT_TYPE_MESSAGE = "Alert type code does not exist"
UNKNOWN_LANGUAGE_MESSAGE = "Preferred language code does not exist"


class SubscriptionService:
    """Subscribe users to alert types and manage their subscriptions."""

    def __init__(
        self,
        user_repository: UserRepository,
        reference_data: ReferenceDataService,
    ):
        self._user_repo = user_repository
        self._reference_data = reference_data

    async def list_subscriptions(self, user_id: str) -> list[Subscription]:
        user = await self._get_user(user_id)
        return list(user.subscriptions)

    async def get_subscription(self, user_id: str, subscription_id: str) -> Subscription:
        user = await self._get_user(user_id)
        return user.get_subscription(subscription_id)

    async def create_subscription(
        self,
        user_id: str,
        alert_type_code: str,
        ms_language_code: str,
    ) -> Subscription:
        """Subscribe the user to an alert type.

        Both codes are checked before anything else and every unknown code
        is reported. A second subscription to the same alert type is a
        conflict.
        """
        alert_type = await self._reference_data.find_alert_type_by_code(
            alert_type_code,
        )
        language = await self._reference_data.find_language_by_ms_locale_code(
            ms_language_code,
        )

        errors = []
        if alert_type is None:
            errors.append(FieldError(ALERT_TYPE_CODE_FIELD, UNKNOWN_ALERT_TYPE_MESSAGE))
        if language is None:
            errors.append(FieldError(LANGUAGE_CODE_FIELD, UNKNOWN_LANGUAGE_MESSAGE))
        if errors:
            raise ValidationFailure(errors)

        user = await self._get_user(user_id)
        subscription = user.subscribe(alert_type, language)
        await self._user_repo.save(user)

        logger.info(
            "Subscribed user [%s] to alert type [%s]",
            user_id,
            alert_type_code,
        )
        return subscription

    async def update_subscription_language(
        self,
        user_id: str,
        subscription_id: str,
        ms_language_code: str,
    ) -> Subscription:
        user = await self._get_user(user_id)

        logger.debug("Fetching subscription [%s] for user [%s]", subscription_id, user_id)
        user.get_subscription(subscription_id)

        language = await self._reference_data.find_language_by_ms_locale_code(
            ms_language_code,
        )
        if language is None:
            raise ValidationFailure(
                [FieldError(LANGUAGE_CODE_FIELD, UNKNOWN_LANGUAGE_MESSAGE)],
            )

        subscription = user.change_subscription_language(subscription_id, language)
        await self._user_repo.save(user)
        logger.debug(
            "Subscription [%s] language is now [%s]",
            subscription_id,
            ms_language_code,
        )
        return subscription

    async def delete_subscription(self, user_id: str, subscription_id: str) -> None:
        user = await self._get_user(user_id)
        user.unsubscribe(subscription_id)
        await self._user_repo.save(user)
        logger.info("Deleted subscription [%s] for user [%s]", subscription_id, user_id)

    async def _get_user(self, user_id: str):
        logger.debug("Fetching user [%s] from repository", user_id)
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
