"""Confirmation code and email verification schemas."""

from datetime import datetime

from pydantic import Field

from cdcp.domain.user import ConfirmationCode, VerificationStatus
from cdcp.presentation.api.schemas.common import CamelModel


class ConfirmationCodeResponse(CamelModel):
    id: str
    user_id: str
    email: str | None
    code: str
    expiry_date: datetime
    created_at: datetime

    @classmethod
    def from_domain(cls, code: ConfirmationCode) -> "ConfirmationCodeResponse":
        return cls(
            id=code.id,
            user_id=code.user_id,
            email=code.email,
            code=code.code,
            expiry_date=code.expiry_date,
            created_at=code.created_at,
        )


class EmailValidationRequest(CamelModel):
    confirmation_code: str | None = Field(None, description="Code sent to the user")


class VerifyCodeRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    code: str | None = None


class VerificationResponse(CamelModel):
    status: VerificationStatus
