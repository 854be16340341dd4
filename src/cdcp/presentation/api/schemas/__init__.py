"""API request/response schemas."""

from cdcp.presentation.api.schemas.common import (
    CamelModel,
    ErrorResponse,
    FieldErrorResponse,
    HealthResponse,
)
from cdcp.presentation.api.schemas.confirmation_codes import (
    ConfirmationCodeResponse,
    EmailValidationRequest,
    VerificationResponse,
    VerifyCodeRequest,
)
from cdcp.presentation.api.schemas.reference import (
    AlertTypeResponse,
    LanguageResponse,
)
from cdcp.presentation.api.schemas.subscriptions import (
    SubscriptionCreateRequest,
    SubscriptionPatchModel,
    SubscriptionResponse,
)
from cdcp.presentation.api.schemas.users import (
    UserAttributeSchema,
    UserCreateRequest,
    UserPatchModel,
    UserResponse,
)

__all__ = [
    "AlertTypeResponse",
    "CamelModel",
    "ConfirmationCodeResponse",
    "EmailValidationRequest",
    "ErrorResponse",
    "FieldErrorResponse",
    "HealthResponse",
    "LanguageResponse",
    "SubscriptionCreateRequest",
    "SubscriptionPatchModel",
    "SubscriptionResponse",
    "UserAttributeSchema",
    "UserCreateRequest",
    "UserPatchModel",
    "UserResponse",
    "VerificationResponse",
    "VerifyCodeRequest",
]
