"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from cdcp.domain.user.aggregates.user import User
from cdcp.domain.user.entities import ConfirmationCode


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Find a user (with codes, subscriptions and attributes) by ID."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email address."""

    @abstractmethod
    async def find_confirmation_codes(self, user_id: str) -> list[ConfirmationCode]:
        """Return every stored confirmation code for the user.

        Returns an empty list when the user does not exist.
        """

    @abstractmethod
    async def save(self, user: User) -> None:
        """Save or update a user together with its owned collections."""

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Delete a user; codes, subscriptions and attributes go with it."""

    @abstractmethod
    async def delete_expired_confirmation_codes(self, now: datetime) -> int:
        """Delete every confirmation code that expired before ``now``.

        Returns
        -------
        Number of codes deleted
        """
