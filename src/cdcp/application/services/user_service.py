"""User management use cases."""

import logging
from typing import Iterable, Optional

from cdcp.domain.user import (
    EmailAlreadyExistsError,
    User,
    UserAttribute,
    UserNotFoundError,
    UserRepository,
)

logger = logging.getLogger(__name__)


class UserService:
    """Create, read, update and delete users."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def create_user(
        self,
        email: Optional[str] = None,
        attributes: Iterable[UserAttribute] = (),
    ) -> User:
        if email and await self._user_repo.find_by_email(email) is not None:
            raise EmailAlreadyExistsError(email)

        user = User.create(email=email, attributes=attributes)
        await self._user_repo.save(user)
        logger.info("Created user [%s]", user.id)
        return user

    async def get_user(self, user_id: str) -> User:
        if not user_id:
            msg = "user_id is required; it must not be blank"
            raise ValueError(msg)

        logger.debug("Fetching user [%s] from repository", user_id)
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update_user(
        self,
        user_id: str,
        email: Optional[str],
        attributes: Iterable[UserAttribute],
    ) -> User:
        """Replace the user's editable fields.

        Changing the email address resets its verified flag.
        """
        user = await self.get_user(user_id)

        if email and email != user.email:
            existing = await self._user_repo.find_by_email(email)
            if existing is not None and existing.id != user.id:
                raise EmailAlreadyExistsError(email)

        user.change_email(email)
        user.replace_attributes(attributes)
        await self._user_repo.save(user)
        logger.debug("Updated user [%s]", user_id)
        return user

    async def delete_user(self, user_id: str) -> None:
        await self.get_user(user_id)
        await self._user_repo.delete(user_id)
        logger.info("Deleted user [%s]", user_id)
