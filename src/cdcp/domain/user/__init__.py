"""User domain layer exports."""

# Aggregates
from cdcp.domain.user.aggregates import User

# Entities
from cdcp.domain.user.entities import ConfirmationCode, Subscription

# Exceptions
from cdcp.domain.user.exceptions import (
    EmailAlreadyExistsError,
    SubscriptionAlreadyExistsError,
    SubscriptionNotFoundError,
    UserNotFoundError,
)

# Repository Interfaces
from cdcp.domain.user.repositories import UserRepository

# Domain Services
from cdcp.domain.user.services import ConfirmationCodeEngine

# Value Objects
from cdcp.domain.user.value_objects import UserAttribute, VerificationStatus

__all__ = [
    # Aggregates
    "User",
    # Entities
    "ConfirmationCode",
    "Subscription",
    # Exceptions
    "EmailAlreadyExistsError",
    "SubscriptionAlreadyExistsError",
    "SubscriptionNotFoundError",
    "UserNotFoundError",
    # Repository Interfaces
    "UserRepository",
    # Domain Services
    "ConfirmationCodeEngine",
    # Value Objects
    "UserAttribute",
    "VerificationStatus",
]
