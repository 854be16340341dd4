"""User endpoints."""

import logging

from fastapi import APIRouter, Request, Response, status

from cdcp.presentation.api.dependencies import (
    Audit,
    DBSession,
    Patcher,
    Principal,
    Users,
)
from cdcp.presentation.api.routers._patch import (
    PATCH_OPENAPI_EXTRA,
    read_patch_document,
)
from cdcp.presentation.api.schemas import (
    UserCreateRequest,
    UserPatchModel,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    responses={
        201: {"description": "User created"},
        400: {"description": "Invalid request"},
        409: {"description": "Email already registered"},
    },
)
async def create_user(
    request: UserCreateRequest,
    principal: Principal,
    session: DBSession,
    users: Users,
    audit: Audit,
) -> UserResponse:
    user = await users.create_user(
        email=request.email,
        attributes=[a.to_domain() for a in request.user_attributes],
    )
    await session.commit()

    audit.record(
        actor=principal.subject,
        description=f"Created user {user.id}",
        payload={"userId": user.id},
        event_type="user.created",
        source="api",
    )
    return UserResponse.from_domain(user)


@router.get(
    "/{user_id}",
    summary="Get a user",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: str,
    _principal: Principal,
    users: Users,
) -> UserResponse:
    return UserResponse.from_domain(await users.get_user(user_id))


@router.patch(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Patch a user",
    description=(
        "Update `email` and `userAttributes` with a JSON Patch "
        "(`application/json-patch+json`) or JSON Merge Patch "
        "(`application/merge-patch+json`) document. Changing the email "
        "resets its verified flag."
    ),
    responses={
        400: {"description": "Malformed patch or invalid result"},
        404: {"description": "User not found"},
        415: {"description": "Unsupported patch media type"},
    },
    openapi_extra=PATCH_OPENAPI_EXTRA,
)
async def patch_user(  # NOQA: PLR0913
    user_id: str,
    request: Request,
    principal: Principal,
    session: DBSession,
    users: Users,
    patcher: Patcher,
    audit: Audit,
) -> Response:
    patch = await read_patch_document(request)
    user = await users.get_user(user_id)

    patched = patcher.apply_or_raise(UserPatchModel.from_domain(user), patch)
    await users.update_user(
        user_id,
        email=patched.email,
        attributes=[a.to_domain() for a in patched.user_attributes],
    )
    await session.commit()

    audit.record(
        actor=principal.subject,
        description=f"Patched user {user_id}",
        payload={"userId": user_id, "mediaType": patch.media_type},
        event_type="user.updated",
        source="api",
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    responses={404: {"description": "User not found"}},
)
async def delete_user(
    user_id: str,
    principal: Principal,
    session: DBSession,
    users: Users,
    audit: Audit,
) -> Response:
    await users.delete_user(user_id)
    await session.commit()

    logger.info("User %s deleted by %s", user_id, principal.subject)
    audit.record(
        actor=principal.subject,
        description=f"Deleted user {user_id}",
        payload={"userId": user_id},
        event_type="user.deleted",
        source="api",
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
