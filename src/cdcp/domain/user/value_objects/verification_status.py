from enum import Enum


class VerificationStatus(str, Enum):
    """Outcome of checking a submitted confirmation code."""

    NO_CODE = "NO_CODE"
    VALID = "VALID"
    EXPIRED = "EXPIRED"
    MISMATCH = "MISMATCH"
