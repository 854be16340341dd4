from cdcp.domain.user.services.confirmation_code_engine import (
    MAX_CODE_LENGTH,
    MIN_CODE_LENGTH,
    ConfirmationCodeEngine,
)

__all__ = ["MAX_CODE_LENGTH", "MIN_CODE_LENGTH", "ConfirmationCodeEngine"]
