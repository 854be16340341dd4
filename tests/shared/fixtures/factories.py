"""Builders for domain objects used across test suites."""

from datetime import datetime, timedelta

from cdcp.domain.reference import AlertType, Language
from cdcp.domain.shared.time import utc_now
from cdcp.domain.user import ConfirmationCode, User
from cdcp.infrastructure.persistence.sqlalchemy.models import (
    AlertTypeModel,
    LanguageModel,
)

ALERT_TYPE = AlertType(
    id="11111111-1111-1111-1111-111111111111",
    code="ALERT_TYPE_CODE",
    description="Test alert type",
)
OTHER_ALERT_TYPE = AlertType(
    id="22222222-2222-2222-2222-222222222222",
    code="OTHER_ALERT_TYPE_CODE",
    description="Another alert type",
)
ENGLISH = Language(
    id="33333333-3333-3333-3333-333333333333",
    code="ENG",
    description="English",
    iso_code="eng",
    ms_locale_code="en-CA",
)
FRENCH = Language(
    id="44444444-4444-4444-4444-444444444444",
    code="FRA",
    description="French",
    iso_code="fra",
    ms_locale_code="fr-CA",
)


def make_code(
    user: User,
    value: str = "12345",
    expires_in: timedelta = timedelta(hours=24),
    now: datetime | None = None,
) -> ConfirmationCode:
    """Build a code expiring ``expires_in`` from ``now`` (negative = already expired).

    ``created_at`` is placed one day before the expiry so that expired codes
    can be built too.
    """
    now = now or utc_now()
    expiry = now + expires_in
    return ConfirmationCode(
        user_id=user.id,
        email=user.email,
        code=value,
        created_at=expiry - timedelta(days=1),
        expiry_date=expiry,
    )


def reference_data_models() -> list:
    """Alert type and language rows matching the builders above."""
    alert_types = [
        AlertTypeModel(id=a.id, code=a.code, description=a.description)
        for a in (ALERT_TYPE, OTHER_ALERT_TYPE)
    ]
    languages = [
        LanguageModel(
            id=lang.id,
            code=lang.code,
            description=lang.description,
            iso_code=lang.iso_code,
            ms_locale_code=lang.ms_locale_code,
        )
        for lang in (ENGLISH, FRENCH)
    ]
    return [*alert_types, *languages]
