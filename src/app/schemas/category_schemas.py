from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _clean_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Category name is required")
    return value


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., max_length=200)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, value):
        return _clean_name(value)

    @field_validator("description")
    @classmethod
    def _description(cls, value):
        return value.strip() if isinstance(value, str) else value


class CategoryUpdateRequest(CategoryCreateRequest):
    name: str | None = Field(None, max_length=200)

    @field_validator("name")
    @classmethod
    def _name(cls, value):
        if value is None:
            return None
        return _clean_name(value)


class CategorySchema(BaseModel):
    id: str
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
