from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models.user import UserRole
from app.schemas.auth_schemas import _check_email


def _clean_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Name is required")
    return value


class UserCreateRequest(BaseModel):
    """Admin-created account; any role may be assigned."""

    email: str = Field(..., description="Account email")
    password: str = Field(..., min_length=6, json_schema_extra={"format": "password"})
    name: str = Field(..., description="Display name")
    role: UserRole = Field(..., description="Account role (admin/staff/manager/user)")

    @field_validator("email")
    @classmethod
    def _email(cls, value):
        return _check_email(value)

    @field_validator("name")
    @classmethod
    def _name(cls, value):
        return _clean_name(value)


class UserUpdateRequest(BaseModel):
    email: str | None = None
    name: str | None = None
    role: UserRole | None = None

    @field_validator("email")
    @classmethod
    def _email(cls, value):
        return None if value is None else _check_email(value)

    @field_validator("name")
    @classmethod
    def _name(cls, value):
        return None if value is None else _clean_name(value)


class PasswordResetRequest(BaseModel):
    new_password: str = Field(..., min_length=6, json_schema_extra={"format": "password"})

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
