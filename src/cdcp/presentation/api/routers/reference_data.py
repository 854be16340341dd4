"""Reference data endpoints (alert types and languages)."""

from fastapi import APIRouter

from cdcp.presentation.api.dependencies import Principal, ReferenceData
from cdcp.presentation.api.schemas import AlertTypeResponse, LanguageResponse

router = APIRouter()


@router.get("/alert-types", summary="List alert types")
async def list_alert_types(
    _principal: Principal,
    reference_data: ReferenceData,
) -> list[AlertTypeResponse]:
    alert_types = await reference_data.list_alert_types()
    return [AlertTypeResponse.from_domain(a) for a in alert_types]


@router.get(
    "/alert-types/{alert_type_id}",
    summary="Get an alert type",
    responses={404: {"description": "Alert type not found"}},
)
async def get_alert_type(
    alert_type_id: str,
    _principal: Principal,
    reference_data: ReferenceData,
) -> AlertTypeResponse:
    return AlertTypeResponse.from_domain(
        await reference_data.get_alert_type(alert_type_id),
    )


@router.get("/languages", summary="List languages")
async def list_languages(
    _principal: Principal,
    reference_data: ReferenceData,
) -> list[LanguageResponse]:
    languages = await reference_data.list_languages()
    return [LanguageResponse.from_domain(lang) for lang in languages]


@router.get(
    "/languages/{language_id}",
    summary="Get a language",
    responses={404: {"description": "Language not found"}},
)
async def get_language(
    language_id: str,
    _principal: Principal,
    reference_data: ReferenceData,
) -> LanguageResponse:
    return LanguageResponse.from_domain(await reference_data.get_language(language_id))
