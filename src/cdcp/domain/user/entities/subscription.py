"""Subscription entity."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from cdcp.domain.reference import AlertType, Language
from cdcp.domain.shared.time import utc_now


class Subscription:
    """A user's subscription to one alert type in a preferred language."""

    def __init__(  # NOQA: PLR0913
        self,
        user_id: str,
        alert_type: AlertType,
        language: Language,
        id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id or str(uuid4())
        self._user_id = user_id
        self._alert_type = alert_type
        self._language = language
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @property
    def id(self) -> str:
        return self._id

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def alert_type(self) -> AlertType:
        return self._alert_type

    @property
    def language(self) -> Language:
        return self._language

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def change_language(self, language: Language) -> bool:
        """Switch the preferred language; returns False if unchanged."""
        if language.id == self._language.id:
            return False
        self._language = language
        self._updated_at = utc_now()
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Subscription):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Subscription(id={self._id}, alert_type={self._alert_type.code}, "
            f"language={self._language.ms_locale_code})"
        )
