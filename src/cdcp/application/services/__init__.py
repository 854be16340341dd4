"""Application services."""

from cdcp.application.services.confirmation_code_service import (
    ConfirmationCodeService,
)
from cdcp.application.services.reference_data_service import (
    ReferenceDataCache,
    ReferenceDataService,
)
from cdcp.application.services.subscription_service import SubscriptionService
from cdcp.application.services.user_service import UserService

__all__ = [
    "ConfirmationCodeService",
    "ReferenceDataCache",
    "ReferenceDataService",
    "SubscriptionService",
    "UserService",
]
