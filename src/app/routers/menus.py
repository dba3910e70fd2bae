"""
Router for navigation menus.

The tree endpoint is public: anonymous callers get the global menu, signed-in
callers also get their assigned items, admins get everything.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db import get_db
from app.dependencies.authz import Caller, get_optional_user, require_roles
from app.models.user import MENU_MANAGER_ROLES
from app.schemas.menu_schemas import (
    MenuCreateRequest,
    MenuSchema,
    MenuTreeNodeSchema,
    MenuUpdateRequest,
    MessageResponse,
)
from app.services import menu_service

router = APIRouter(prefix="/api/menus", tags=["Menus"])

# Module-level dependencies to avoid calling Depends() in function defaults
db_dependency = Depends(get_db)
optional_user_dependency = Depends(get_optional_user)
menu_manager_dependency = Depends(require_roles(*MENU_MANAGER_ROLES))


@router.get(
    "",
    response_model=list[MenuTreeNodeSchema],
    summary="Get menu tree",
    description="Menu tree visible to the caller (token optional)",
)
def get_menu_tree(
    caller: Caller = optional_user_dependency,
    db: Session = db_dependency,
):
    roots = menu_service.get_menu_tree(db, caller)
    return [MenuTreeNodeSchema.from_node(node) for node in roots]


@router.get(
    "/all",
    response_model=list[MenuSchema],
    summary="Get all menus (flat)",
    description="Flat menu list for management, optionally filtered by `global` (Admin/Staff/Manager)",
)
def get_all_menus(
    is_global: bool | None = Query(None, alias="global", description="true: global only, false: user-specific only"),
    _caller: Caller = menu_manager_dependency,
    db: Session = db_dependency,
):
    menus = menu_service.list_menus(db, is_global)
    return [MenuSchema.from_menu(menu, include_owner=True) for menu in menus]


@router.get(
    "/{menu_id}",
    response_model=MenuSchema,
    summary="Get menu",
    description="Single menu item with its parent name",
)
def get_menu(menu_id: str, db: Session = db_dependency):
    return MenuSchema.from_menu(menu_service.get_menu(db, menu_id))


@router.post(
    "",
    response_model=MenuSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create menu",
    description="Create a link or filter menu item (Admin/Staff/Manager)",
)
def create_menu(
    request: MenuCreateRequest,
    _caller: Caller = menu_manager_dependency,
    db: Session = db_dependency,
):
    menu = menu_service.create_menu(db, request)
    return MenuSchema.from_menu(menu)


@router.put(
    "/{menu_id}",
    response_model=MenuSchema,
    summary="Update menu",
    description="Partial update; omitted fields are left unchanged (Admin/Staff/Manager)",
)
def update_menu(
    menu_id: str,
    request: MenuUpdateRequest,
    _caller: Caller = menu_manager_dependency,
    db: Session = db_dependency,
):
    menu = menu_service.update_menu(db, menu_id, request)
    return MenuSchema.from_menu(menu)


@router.delete(
    "/{menu_id}",
    response_model=MessageResponse,
    summary="Delete menu",
    description="Delete a menu item that has no submenus (Admin/Staff/Manager)",
)
def delete_menu(
    menu_id: str,
    _caller: Caller = menu_manager_dependency,
    db: Session = db_dependency,
):
    menu_service.delete_menu(db, menu_id)
    return {"message": "Menu deleted successfully"}
