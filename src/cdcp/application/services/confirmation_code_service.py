"""Confirmation code use cases: issue, verify, sweep."""

import logging
from datetime import datetime
from typing import Optional

from cdcp.domain.shared.time import utc_now
from cdcp.domain.user import (
    ConfirmationCode,
    ConfirmationCodeEngine,
    User,
    UserNotFoundError,
    UserRepository,
    VerificationStatus,
)

logger = logging.getLogger(__name__)


class ConfirmationCodeService:
    """Service for issuing and checking email confirmation codes."""

    def __init__(
        self,
        user_repository: UserRepository,
        engine: ConfirmationCodeEngine,
    ):
        self._user_repo = user_repository
        self._engine = engine

    async def create_code(self, user_id: str) -> ConfirmationCode:
        """Issue a new code for the user and persist it.

        Raises
        ------
        UserNotFoundError
            If the user does not exist
        """
        user = await self._get_user(user_id)
        code = self._engine.issue(user)
        await self._user_repo.save(user)
        logger.debug(
            "Created confirmation code for user [%s] (expiry: [%s])",
            user_id,
            code.expiry_date.isoformat(),
        )
        return code

    async def list_codes(self, user_id: str) -> list[ConfirmationCode]:
        user = await self._get_user(user_id)
        return list(user.confirmation_codes)

    async def classify_code(
        self,
        code: Optional[str],
        user_id: str,
    ) -> VerificationStatus:
        """Classify a submitted code; never raises for business outcomes."""
        if not code:
            return VerificationStatus.NO_CODE

        stored = await self._user_repo.find_confirmation_codes(user_id)
        status = self._engine.classify(code, stored)
        logger.debug("Confirmation code for user [%s] is %s", user_id, status.value)
        return status

    async def verify_email(self, user_id: str, code: Optional[str]) -> VerificationStatus:
        """Verify the user's email address with a submitted code.

        On success the email is marked verified and every outstanding code
        is consumed.
        """
        user = await self._get_user(user_id)
        status = self._engine.classify(code, user.confirmation_codes)

        if status is not VerificationStatus.VALID:
            logger.debug("User [%s] has no valid confirmation code (%s)", user_id, status.value)
            return status

        logger.info("Found confirmation code for user [%s]; validating email address", user_id)
        user.mark_email_verified()
        await self._user_repo.save(user)
        return status

    async def sweep_expired(self, now: Optional[datetime] = None) -> int:
        """Delete every expired confirmation code; returns how many."""
        removed = await self._user_repo.delete_expired_confirmation_codes(now or utc_now())
        if removed:
            logger.info("Removed %d expired confirmation code(s)", removed)
        return removed

    async def _get_user(self, user_id: str) -> User:
        logger.debug("Fetching user [%s] from repository", user_id)
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
