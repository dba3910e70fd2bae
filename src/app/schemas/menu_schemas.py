from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models.menu import MenuType
from app.services.menu_tree import MenuNode
from app.utils.ids import is_object_id, normalize_object_id


def _optional_object_id(value, message: str):
    if value is None or value == "":
        return None
    if not is_object_id(value):
        raise ValueError(message)
    return normalize_object_id(value)


def _strip_or_none(value):
    if isinstance(value, str):
        return value.strip()
    return value


# Range of the BIGINT `menus.order` column
ORDER_MIN = -(2**63)
ORDER_MAX = 2**63 - 1


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Requests
# ============================================================================


class MenuFieldsRequest(_CamelModel):
    """Fields shared by menu create and update bodies (all optional)."""

    name: str | None = Field(None, description="Display label")
    link: str | None = Field(None, description="Target path; defaults to '/' for filter menus")
    menu_type: MenuType | None = Field(None, description="'link' or 'filter'")
    filter_province: str | None = None
    filter_district: str | None = None
    filter_categories: list[str] | None = Field(None, description="Category ids for filter menus")
    parent: str | None = Field(None, description="Parent menu id; null or empty for a root item")
    order: int | None = Field(None, ge=ORDER_MIN, le=ORDER_MAX, description="Sibling order (signed 64-bit)")

    @field_validator("name", "link", "filter_province", "filter_district", mode="before")
    @classmethod
    def _strip(cls, value):
        return _strip_or_none(value)

    @field_validator("filter_categories")
    @classmethod
    def _check_categories(cls, value):
        if value is None:
            return None
        invalid = [item for item in value if not is_object_id(item)]
        if invalid:
            raise ValueError(f"Invalid category ID: {', '.join(map(str, invalid))}")
        return [normalize_object_id(item) for item in value]

    @field_validator("order", mode="before")
    @classmethod
    def _check_order(cls, value):
        # true/false are not accepted as 1/0
        if isinstance(value, bool):
            raise ValueError("Order must be an integer")
        return value

    @field_validator("parent", mode="before")
    @classmethod
    def _check_parent(cls, value):
        return _optional_object_id(value, "Invalid parent menu ID")


class MenuCreateRequest(MenuFieldsRequest):
    name: str = Field(..., description="Display label")
    is_global: bool | None = Field(None, description="Visible to every caller (default true)")
    user_id: str | None = Field(None, description="Owner of a user-specific menu")

    @field_validator("user_id", mode="before")
    @classmethod
    def _check_user_id(cls, value):
        return _optional_object_id(value, "Invalid user ID")


class MenuUpdateRequest(MenuFieldsRequest):
    pass


class UserMenuCreateRequest(MenuFieldsRequest):
    """Body for creating a menu item that belongs to one user."""

    name: str = Field(..., description="Display label")


class MenuIdsRequest(_CamelModel):
    menu_ids: list[str] = Field(..., description="Menu ids")

    @field_validator("menu_ids")
    @classmethod
    def _check_ids(cls, value):
        invalid = [item for item in value if not is_object_id(item)]
        if invalid:
            raise ValueError(f"Invalid menu ID: {', '.join(map(str, invalid))}")
        return [normalize_object_id(item) for item in value]


# ============================================================================
# Responses
# ============================================================================


class MenuParentRef(_CamelModel):
    id: str
    name: str


class MenuOwnerRef(_CamelModel):
    id: str
    name: str
    email: str


class MenuBaseSchema(_CamelModel):
    id: str
    name: str
    link: str
    menu_type: MenuType
    filter_province: str | None = None
    filter_district: str | None = None
    filter_categories: list[str] | None = None
    order: int
    is_global: bool
    user_id: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @classmethod
    def _base_fields(cls, menu) -> dict:
        return MenuBaseSchema.model_validate(menu).model_dump()


class MenuSchema(MenuBaseSchema):
    """Single menu item with its parent populated."""

    parent: MenuParentRef | None = None
    user: MenuOwnerRef | None = None

    @classmethod
    def from_menu(cls, menu, include_owner: bool = False) -> "MenuSchema":
        parent = MenuParentRef(id=menu.parent.id, name=menu.parent.name) if menu.parent is not None else None
        owner = None
        if include_owner and menu.owner is not None:
            owner = MenuOwnerRef(id=menu.owner.id, name=menu.owner.name, email=menu.owner.email)
        return cls(**cls._base_fields(menu), parent=parent, user=owner)


class MenuTreeNodeSchema(MenuBaseSchema):
    """Menu item inside the navigation tree; `parent` is the bare parent id."""

    parent: str | None = None
    children: list["MenuTreeNodeSchema"] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: MenuNode) -> "MenuTreeNodeSchema":
        return cls(
            **cls._base_fields(node.item),
            parent=node.item.parent_id,
            children=[cls.from_node(child) for child in node.children],
        )


class MessageResponse(BaseModel):
    message: str


class AssignableUserSchema(_CamelModel):
    id: str
    name: str
    email: str
    role: str


class UserMenuAssignmentsResponse(_CamelModel):
    assigned_menu_ids: list[str]
    all_menus: list[MenuSchema]


class AssignGlobalResponse(_CamelModel):
    message: str
    user_count: int
    menu_count: int
