import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models.user import UserRole

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str) -> str:
    value = (value or "").strip().lower()
    if not _EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


class LoginRequest(BaseModel):
    """Login credentials schema with masked password in Swagger UI."""

    email: str = Field(..., description="Account email", json_schema_extra={"example": "admin@gmail.com"})
    password: str = Field(
        ...,
        min_length=1,
        description="Account password",
        json_schema_extra={"format": "password", "example": "secure_password123"},
    )

    @field_validator("email")
    @classmethod
    def _email(cls, value):
        return _check_email(value)


class RegisterRequest(BaseModel):
    """Account registration schema with masked password."""

    email: str = Field(..., description="Account email", json_schema_extra={"example": "jane@example.com"})
    password: str = Field(
        ...,
        min_length=6,
        description="Password (at least 6 characters)",
        json_schema_extra={"format": "password", "example": "secure_password123"},
    )
    name: str = Field(..., description="Display name", json_schema_extra={"example": "Jane"})
    role: UserRole | None = Field(None, description="Account role (defaults to user)")

    @field_validator("email")
    @classmethod
    def _email(cls, value):
        return _check_email(value)

    @field_validator("name")
    @classmethod
    def _name(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class UserResponse(BaseModel):
    """User profile response schema."""

    id: str = Field(..., description="User id")
    email: str = Field(..., description="User email address")
    name: str = Field(..., description="Display name")
    role: UserRole = Field(..., description="Account role (admin/staff/manager/user)")
    created_at: datetime | None = Field(None, description="Account creation time")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TokenResponse(BaseModel):
    """JWT token response schema."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    user: UserResponse = Field(..., description="User information")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
