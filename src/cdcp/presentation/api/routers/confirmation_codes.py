"""Confirmation code and email verification endpoints."""

import logging

from fastapi import APIRouter, Response, status

from cdcp.domain.shared.exceptions import FieldError, ValidationFailure
from cdcp.domain.user import VerificationStatus
from cdcp.presentation.api.dependencies import (
    Audit,
    ConfirmationCodes,
    DBSession,
    Principal,
)
from cdcp.presentation.api.schemas import (
    ConfirmationCodeResponse,
    EmailValidationRequest,
    VerificationResponse,
    VerifyCodeRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

VERIFY_CODE_STATUS = {
    VerificationStatus.VALID: status.HTTP_200_OK,
    VerificationStatus.EXPIRED: status.HTTP_400_BAD_REQUEST,
    VerificationStatus.MISMATCH: status.HTTP_400_BAD_REQUEST,
    VerificationStatus.NO_CODE: status.HTTP_404_NOT_FOUND,
}

EMAIL_VALIDATION_MESSAGES = {
    VerificationStatus.NO_CODE: "No confirmation code to check",
    VerificationStatus.EXPIRED: "Confirmation code has expired",
    VerificationStatus.MISMATCH: "Confirmation code does not match",
}


@router.get(
    "/users/{user_id}/confirmation-codes",
    summary="List a user's confirmation codes",
    responses={404: {"description": "User not found"}},
)
async def list_confirmation_codes(
    user_id: str,
    _principal: Principal,
    confirmation_codes: ConfirmationCodes,
) -> list[ConfirmationCodeResponse]:
    codes = await confirmation_codes.list_codes(user_id)
    return [ConfirmationCodeResponse.from_domain(c) for c in codes]


@router.post(
    "/users/{user_id}/confirmation-codes",
    status_code=status.HTTP_201_CREATED,
    summary="Issue a confirmation code",
    responses={404: {"description": "User not found"}},
)
async def create_confirmation_code(
    user_id: str,
    principal: Principal,
    session: DBSession,
    confirmation_codes: ConfirmationCodes,
    audit: Audit,
) -> ConfirmationCodeResponse:
    code = await confirmation_codes.create_code(user_id)
    await session.commit()

    audit.record(
        actor=principal.subject,
        description=f"Issued confirmation code for user {user_id}",
        payload={"userId": user_id, "confirmationCodeId": code.id},
        event_type="confirmation-code.created",
        source="api",
    )
    return ConfirmationCodeResponse.from_domain(code)


@router.post(
    "/users/{user_id}/email-validations",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Verify a user's email address",
    responses={
        202: {"description": "Email address verified"},
        400: {"description": "Code missing, expired or not matching"},
        404: {"description": "User not found"},
    },
)
async def validate_email(  # NOQA: PLR0913
    user_id: str,
    request: EmailValidationRequest,
    principal: Principal,
    session: DBSession,
    confirmation_codes: ConfirmationCodes,
    audit: Audit,
) -> Response:
    result = await confirmation_codes.verify_email(user_id, request.confirmation_code)

    if result is not VerificationStatus.VALID:
        raise ValidationFailure(
            [FieldError("confirmationCode", EMAIL_VALIDATION_MESSAGES[result])],
        )

    await session.commit()
    audit.record(
        actor=principal.subject,
        description=f"Verified email address of user {user_id}",
        payload={"userId": user_id},
        event_type="user.email-verified",
        source="api",
    )
    return Response(status_code=status.HTTP_202_ACCEPTED)


@router.post(
    "/verify-code",
    summary="Check a confirmation code without consuming it",
    responses={
        200: {"description": "Code is valid"},
        400: {"description": "Code expired or not matching"},
        404: {"description": "No code to check"},
    },
)
# camelCase path kept for clients of the earlier API
@router.post("/verifyCode", include_in_schema=False)
async def verify_code(
    request: VerifyCodeRequest,
    response: Response,
    _principal: Principal,
    confirmation_codes: ConfirmationCodes,
) -> VerificationResponse:
    result = await confirmation_codes.classify_code(request.code, request.user_id)
    response.status_code = VERIFY_CODE_STATUS[result]
    return VerificationResponse(status=result)
