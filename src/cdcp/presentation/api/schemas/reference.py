"""Reference data schemas."""

from pydantic import Field

from cdcp.domain.reference import AlertType, Language
from cdcp.presentation.api.schemas.common import CamelModel


class AlertTypeResponse(CamelModel):
    id: str
    code: str = Field(..., description="Stable alert type code")
    description: str

    @classmethod
    def from_domain(cls, alert_type: AlertType) -> "AlertTypeResponse":
        return cls(
            id=alert_type.id,
            code=alert_type.code,
            description=alert_type.description,
        )


class LanguageResponse(CamelModel):
    id: str
    code: str
    description: str
    iso_code: str = Field(..., description="ISO 639-3 language code")
    ms_locale_code: str = Field(..., description="Microsoft locale code, e.g. en-CA")

    @classmethod
    def from_domain(cls, language: Language) -> "LanguageResponse":
        return cls(
            id=language.id,
            code=language.code,
            description=language.description,
            iso_code=language.iso_code,
            ms_locale_code=language.ms_locale_code,
        )
