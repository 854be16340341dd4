"""Background jobs."""

from cdcp.infrastructure.scheduling.confirmation_code_sweeper import (
    ConfirmationCodeSweeper,
)

__all__ = ["ConfirmationCodeSweeper"]
