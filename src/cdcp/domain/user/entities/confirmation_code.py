"""ConfirmationCode entity."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from cdcp.domain.shared.time import ensure_tz_aware, utc_now


class ConfirmationCode:
    """
    A short numeric token proving control of an email address.

    Codes belong to a user and are only valid until ``expiry_date``.
    A user may hold several outstanding codes at once.
    """

    def __init__(  # NOQA: PLR0913
        self,
        user_id: str,
        code: str,
        expiry_date: datetime,
        email: Optional[str] = None,
        id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ):
        if not code or not code.isdigit():
            msg = f"Confirmation code must be a non-empty digit string, got {code!r}"
            raise ValueError(msg)

        created_at = ensure_tz_aware(created_at) if created_at else utc_now()
        expiry_date = ensure_tz_aware(expiry_date)
        if expiry_date <= created_at:
            msg = "Confirmation code expiry must be after its creation time"
            raise ValueError(msg)

        self._id = id or str(uuid4())
        self._user_id = user_id
        self._email = email
        self._code = code
        self._expiry_date = expiry_date
        self._created_at = created_at

    @property
    def id(self) -> str:
        return self._id

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def email(self) -> Optional[str]:
        return self._email

    @property
    def code(self) -> str:
        return self._code

    @property
    def expiry_date(self) -> datetime:
        return self._expiry_date

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def is_expired(self, now: datetime) -> bool:
        """Check if the code has expired at ``now``."""
        return ensure_tz_aware(now) > self._expiry_date

    def matches(self, value: str) -> bool:
        return self._code == value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfirmationCode):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"ConfirmationCode(id={self._id}, user_id={self._user_id}, "
            f"expiry_date={self._expiry_date.isoformat()})"
        )
