"""User schemas, including the patchable view of a user."""

from datetime import datetime

from pydantic import ConfigDict, EmailStr, Field

from cdcp.application.patching import default_rules
from cdcp.domain.shared.exceptions import FieldError
from cdcp.domain.user import User, UserAttribute
from cdcp.presentation.api.schemas.common import CamelModel


class UserAttributeSchema(CamelModel):
    name: str = Field(..., max_length=255)
    value: str | None = None

    def to_domain(self) -> UserAttribute:
        return UserAttribute(name=self.name, value=self.value)


class UserCreateRequest(CamelModel):
    email: EmailStr | None = Field(None, description="Email address to notify")
    user_attributes: list[UserAttributeSchema] = Field(default_factory=list)


class UserResponse(CamelModel):
    id: str
    email: str | None
    email_verified: bool
    user_attributes: list[UserAttributeSchema]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            email_verified=user.email_verified,
            user_attributes=[
                UserAttributeSchema(name=a.name, value=a.value) for a in user.attributes
            ],
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserPatchModel(CamelModel):
    """The fields of a user that clients may patch."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = None
    user_attributes: list[UserAttributeSchema] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, user: User) -> "UserPatchModel":
        return cls(
            email=user.email,
            user_attributes=[
                UserAttributeSchema(name=a.name, value=a.value) for a in user.attributes
            ],
        )


@default_rules.rule(UserPatchModel)
def _attribute_names_not_blank(model: UserPatchModel) -> list[FieldError]:
    return [
        FieldError(f"userAttributes.{i}.name", "must not be blank")
        for i, attribute in enumerate(model.user_attributes)
        if not attribute.name.strip()
    ]


@default_rules.rule(UserPatchModel)
def _attribute_names_unique(model: UserPatchModel) -> list[FieldError]:
    seen: set[str] = set()
    errors = []
    for i, attribute in enumerate(model.user_attributes):
        if attribute.name in seen:
            errors.append(
                FieldError(f"userAttributes.{i}.name", "duplicate attribute name"),
            )
        seen.add(attribute.name)
    return errors
