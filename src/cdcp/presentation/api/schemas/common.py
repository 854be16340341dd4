"""Common schemas shared across API endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code for programmatic handling")
    errors: list[FieldErrorResponse] | None = Field(
        None,
        description="Field-level violations (validation errors only)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "No user with id=[00000000-0000-0000-0000-000000000000] was found",
                "code": "USER_NOT_FOUND",
            },
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    api_versions: list[str] = Field(..., description="Mounted API versions")
