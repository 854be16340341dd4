"""Entities owned by the User aggregate."""

from cdcp.domain.user.entities.confirmation_code import ConfirmationCode
from cdcp.domain.user.entities.subscription import Subscription

__all__ = ["ConfirmationCode", "Subscription"]
