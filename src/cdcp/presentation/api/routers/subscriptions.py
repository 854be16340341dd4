"""Subscription endpoints, nested under a user."""

from fastapi import APIRouter, Request, Response, status

from cdcp.presentation.api.dependencies import (
    Audit,
    DBSession,
    Patcher,
    Principal,
    Subscriptions,
)
from cdcp.presentation.api.routers._patch import (
    PATCH_OPENAPI_EXTRA,
    read_patch_document,
)
from cdcp.presentation.api.schemas import (
    SubscriptionCreateRequest,
    SubscriptionPatchModel,
    SubscriptionResponse,
)

router = APIRouter(prefix="/users/{user_id}/subscriptions")


@router.get(
    "",
    summary="List a user's subscriptions",
    responses={404: {"description": "User not found"}},
)
async def list_subscriptions(
    user_id: str,
    _principal: Principal,
    subscriptions: Subscriptions,
) -> list[SubscriptionResponse]:
    items = await subscriptions.list_subscriptions(user_id)
    return [SubscriptionResponse.from_domain(s) for s in items]


@router.get(
    "/{subscription_id}",
    summary="Get a subscription",
    responses={404: {"description": "User or subscription not found"}},
)
async def get_subscription(
    user_id: str,
    subscription_id: str,
    _principal: Principal,
    subscriptions: Subscriptions,
) -> SubscriptionResponse:
    subscription = await subscriptions.get_subscription(user_id, subscription_id)
    return SubscriptionResponse.from_domain(subscription)


@router.post(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Subscribe a user to an alert type",
    responses={
        400: {"description": "Unknown alert type or language code"},
        404: {"description": "User not found"},
        409: {"description": "User already subscribed to this alert type"},
    },
)
async def create_subscription(  # NOQA: PLR0913
    user_id: str,
    request: SubscriptionCreateRequest,
    principal: Principal,
    session: DBSession,
    subscriptions: Subscriptions,
    audit: Audit,
) -> Response:
    subscription = await subscriptions.create_subscription(
        user_id,
        alert_type_code=request.alert_type_code,
        ms_language_code=request.ms_language_code,
    )
    await session.commit()

    audit.record(
        actor=principal.subject,
        description=f"Subscribed user {user_id} to {request.alert_type_code}",
        payload={
            "userId": user_id,
            "subscriptionId": subscription.id,
            "alertTypeCode": request.alert_type_code,
            "msLanguageCode": request.ms_language_code,
        },
        event_type="subscription.created",
        source="api",
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{subscription_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Patch a subscription",
    description="Only `msLanguageCode` may be changed.",
    responses={
        400: {"description": "Malformed patch or unknown language code"},
        404: {"description": "User or subscription not found"},
        415: {"description": "Unsupported patch media type"},
    },
    openapi_extra=PATCH_OPENAPI_EXTRA,
)
async def patch_subscription(  # NOQA: PLR0913
    user_id: str,
    subscription_id: str,
    request: Request,
    principal: Principal,
    session: DBSession,
    subscriptions: Subscriptions,
    patcher: Patcher,
    audit: Audit,
) -> Response:
    patch = await read_patch_document(request)
    subscription = await subscriptions.get_subscription(user_id, subscription_id)

    patched = patcher.apply_or_raise(
        SubscriptionPatchModel.from_domain(subscription),
        patch,
    )
    await subscriptions.update_subscription_language(
        user_id,
        subscription_id,
        ms_language_code=patched.ms_language_code,
    )
    await session.commit()

    audit.record(
        actor=principal.subject,
        description=f"Patched subscription {subscription_id}",
        payload={
            "userId": user_id,
            "subscriptionId": subscription_id,
            "msLanguageCode": patched.ms_language_code,
        },
        event_type="subscription.updated",
        source="api",
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{subscription_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a subscription",
    responses={404: {"description": "User or subscription not found"}},
)
async def delete_subscription(  # NOQA: PLR0913
    user_id: str,
    subscription_id: str,
    principal: Principal,
    session: DBSession,
    subscriptions: Subscriptions,
    audit: Audit,
) -> Response:
    await subscriptions.delete_subscription(user_id, subscription_id)
    await session.commit()

    audit.record(
        actor=principal.subject,
        description=f"Deleted subscription {subscription_id}",
        payload={"userId": user_id, "subscriptionId": subscription_id},
        event_type="subscription.deleted",
        source="api",
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
