"""User aggregate: identity, confirmation codes, subscriptions, attributes."""

from datetime import datetime
from typing import Iterable, Optional
from uuid import uuid4

from cdcp.domain.reference import AlertType, Language
from cdcp.domain.shared.time import utc_now
from cdcp.domain.user.entities import ConfirmationCode, Subscription
from cdcp.domain.user.exceptions import (
    SubscriptionAlreadyExistsError,
    SubscriptionNotFoundError,
)
from cdcp.domain.user.value_objects import UserAttribute


class User:
    """
    User aggregate root.

    The user owns its confirmation codes, subscriptions and attributes;
    they are loaded, saved and deleted together. A user holds at most one
    subscription per alert type.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Optional[str] = None,
        email_verified: bool = False,
        id: Optional[str] = None,
        confirmation_codes: Iterable[ConfirmationCode] = (),
        subscriptions: Iterable[Subscription] = (),
        attributes: Iterable[UserAttribute] = (),
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id or str(uuid4())
        self._email = email
        self._email_verified = email_verified
        self._confirmation_codes = list(confirmation_codes)
        self._subscriptions = list(subscriptions)
        self._attributes = list(attributes)
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> str:
        return self._id

    @property
    def email(self) -> Optional[str]:
        return self._email

    @property
    def email_verified(self) -> bool:
        return self._email_verified

    @property
    def confirmation_codes(self) -> tuple[ConfirmationCode, ...]:
        return tuple(self._confirmation_codes)

    @property
    def subscriptions(self) -> tuple[Subscription, ...]:
        return tuple(self._subscriptions)

    @property
    def attributes(self) -> tuple[UserAttribute, ...]:
        return tuple(self._attributes)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    def change_email(self, email: Optional[str]) -> None:
        """Change the email address; a new address must be verified again."""
        if email == self._email:
            return
        self._email = email
        self._email_verified = False
        self._touch()

    def replace_attributes(self, attributes: Iterable[UserAttribute]) -> None:
        self._attributes = list(attributes)
        self._touch()

    # -------------------------------------------------------------------------
    # Confirmation codes
    # -------------------------------------------------------------------------

    def add_confirmation_code(self, code: ConfirmationCode) -> None:
        if code.user_id != self._id:
            msg = f"Confirmation code belongs to user {code.user_id}, not {self._id}"
            raise ValueError(msg)
        self._confirmation_codes.append(code)
        self._touch()

    def mark_email_verified(self) -> None:
        """Record a successful verification; outstanding codes are consumed."""
        self._email_verified = True
        self._confirmation_codes.clear()
        self._touch()

    def remove_expired_codes(self, now: datetime) -> int:
        remaining = [c for c in self._confirmation_codes if not c.is_expired(now)]
        removed = len(self._confirmation_codes) - len(remaining)
        if removed:
            self._confirmation_codes = remaining
            self._touch()
        return removed

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def find_subscription(self, subscription_id: str) -> Optional[Subscription]:
        return next((s for s in self._subscriptions if s.id == subscription_id), None)

    def get_subscription(self, subscription_id: str) -> Subscription:
        subscription = self.find_subscription(subscription_id)
        if subscription is None:
            raise SubscriptionNotFoundError(subscription_id)
        return subscription

    def find_subscription_by_alert_type(
        self,
        alert_type_code: str,
    ) -> Optional[Subscription]:
        return next(
            (s for s in self._subscriptions if s.alert_type.code == alert_type_code),
            None,
        )

    def subscribe(self, alert_type: AlertType, language: Language) -> Subscription:
        if self.find_subscription_by_alert_type(alert_type.code) is not None:
            raise SubscriptionAlreadyExistsError(self._id, alert_type.code)

        subscription = Subscription(
            user_id=self._id,
            alert_type=alert_type,
            language=language,
        )
        self._subscriptions.append(subscription)
        self._touch()
        return subscription

    def change_subscription_language(
        self,
        subscription_id: str,
        language: Language,
    ) -> Subscription:
        subscription = self.get_subscription(subscription_id)
        if subscription.change_language(language):
            self._touch()
        return subscription

    def unsubscribe(self, subscription_id: str) -> None:
        subscription = self.get_subscription(subscription_id)
        self._subscriptions.remove(subscription)
        self._touch()

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        email: Optional[str] = None,
        attributes: Iterable[UserAttribute] = (),
    ) -> "User":
        return cls(email=email, attributes=attributes)

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: str,
        email: Optional[str],
        email_verified: bool,
        confirmation_codes: Iterable[ConfirmationCode],
        subscriptions: Iterable[Subscription],
        attributes: Iterable[UserAttribute],
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            email_verified=email_verified,
            confirmation_codes=confirmation_codes,
            subscriptions=subscriptions,
            attributes=attributes,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _touch(self) -> None:
        self._updated_at = utc_now()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email})"
