from .menu_schemas import (
    MenuCreateRequest,
    MenuIdsRequest,
    MenuSchema,
    MenuTreeNodeSchema,
    MenuUpdateRequest,
    UserMenuCreateRequest,
)

__all__ = [
    "MenuCreateRequest",
    "MenuIdsRequest",
    "MenuSchema",
    "MenuTreeNodeSchema",
    "MenuUpdateRequest",
    "UserMenuCreateRequest",
]
