"""Subscription schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field

from cdcp.application.patching import default_rules, not_blank
from cdcp.domain.user import Subscription
from cdcp.presentation.api.schemas.common import CamelModel


class SubscriptionCreateRequest(CamelModel):
    alert_type_code: str = Field(..., min_length=1, max_length=50)
    ms_language_code: str = Field(..., min_length=1, max_length=10)


class SubscriptionResponse(CamelModel):
    id: str
    user_id: str
    alert_type_code: str
    ms_language_code: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, subscription: Subscription) -> "SubscriptionResponse":
        return cls(
            id=subscription.id,
            user_id=subscription.user_id,
            alert_type_code=subscription.alert_type.code,
            ms_language_code=subscription.language.ms_locale_code,
            created_at=subscription.created_at,
            updated_at=subscription.updated_at,
        )


class SubscriptionPatchModel(CamelModel):
    """The fields of a subscription that clients may patch."""

    model_config = ConfigDict(extra="forbid")

    ms_language_code: str

    @classmethod
    def from_domain(cls, subscription: Subscription) -> "SubscriptionPatchModel":
        return cls(ms_language_code=subscription.language.ms_locale_code)


default_rules.register(
    SubscriptionPatchModel,
    not_blank("ms_language_code", field="msLanguageCode"),
)
