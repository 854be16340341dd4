"""Issue and classify email confirmation codes."""

import logging
import random
import secrets
import string
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from cdcp.domain.shared.time import utc_now
from cdcp.domain.user.aggregates.user import User
from cdcp.domain.user.entities import ConfirmationCode
from cdcp.domain.user.value_objects import VerificationStatus

logger = logging.getLogger(__name__)

MIN_CODE_LENGTH = 1
MAX_CODE_LENGTH = 8


class ConfirmationCodeEngine:
    """Generates time-bounded numeric codes and classifies submitted ones.

    Parameters
    ----------
    code_length
        Number of decimal digits in a generated code (1-8).
    expiry
        How long a generated code stays valid.
    random_source
        Source of randomness for the digits. Defaults to the OS CSPRNG.
    clock
        Returns the current (timezone-aware) time.
    """

    def __init__(
        self,
        code_length: int,
        expiry: timedelta,
        random_source: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        if not MIN_CODE_LENGTH <= code_length <= MAX_CODE_LENGTH:
            msg = (
                f"code_length must be between {MIN_CODE_LENGTH} and "
                f"{MAX_CODE_LENGTH}, got {code_length}"
            )
            raise ValueError(msg)
        if expiry <= timedelta(0):
            msg = f"expiry must be positive, got {expiry}"
            raise ValueError(msg)

        self._code_length = code_length
        self._expiry = expiry
        self._random = random_source or secrets.SystemRandom()
        self._clock = clock

    @property
    def code_length(self) -> int:
        return self._code_length

    @property
    def expiry(self) -> timedelta:
        return self._expiry

    def generate_value(self) -> str:
        return "".join(
            self._random.choice(string.digits) for _ in range(self._code_length)
        )

    def issue(self, user: User) -> ConfirmationCode:
        """Create a new code for ``user`` and attach it to the aggregate.

        Duplicate values among the user's outstanding codes are allowed.
        """
        now = self._clock()
        code = ConfirmationCode(
            user_id=user.id,
            email=user.email,
            code=self.generate_value(),
            created_at=now,
            expiry_date=now + self._expiry,
        )
        user.add_confirmation_code(code)
        logger.debug(
            "Issued confirmation code for user [%s] (expiry: [%s])",
            user.id,
            code.expiry_date.isoformat(),
        )
        return code

    def classify(
        self,
        submitted: Optional[str],
        stored: Iterable[ConfirmationCode],
    ) -> VerificationStatus:
        """Classify ``submitted`` against the user's stored codes.

        Precedence: no submitted value or no stored codes gives NO_CODE;
        no stored code with the same value gives MISMATCH; a value match
        that has expired gives EXPIRED; anything else is VALID. All stored
        codes are considered, not only the most recent one. When several
        codes share the submitted value, one unexpired match is enough.
        """
        if not submitted:
            return VerificationStatus.NO_CODE

        codes = list(stored)
        if not codes:
            return VerificationStatus.NO_CODE

        matches = [code for code in codes if code.matches(submitted)]
        if not matches:
            return VerificationStatus.MISMATCH

        now = self._clock()
        if all(code.is_expired(now) for code in matches):
            return VerificationStatus.EXPIRED

        return VerificationStatus.VALID
