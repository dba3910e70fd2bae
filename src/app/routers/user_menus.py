"""
Router for per-user menu assignment (Admin/Staff/Manager).
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db import get_db
from app.dependencies.authz import Caller, require_roles
from app.models.user import MENU_MANAGER_ROLES
from app.schemas.menu_schemas import (
    AssignableUserSchema,
    AssignGlobalResponse,
    MenuIdsRequest,
    MenuSchema,
    MessageResponse,
    UserMenuAssignmentsResponse,
    UserMenuCreateRequest,
)
from app.services import user_menu_service

router = APIRouter(prefix="/api/user-menus", tags=["User_Menus"])

db_dependency = Depends(get_db)
menu_manager_dependency = Depends(require_roles(*MENU_MANAGER_ROLES))


@router.get(
    "/users",
    response_model=list[AssignableUserSchema],
    summary="List assignable users",
)
def list_users(
    _caller: Caller = menu_manager_dependency,
    db: Session = db_dependency,
):
    users = user_menu_service.list_assignable_users(db)
    return [AssignableUserSchema(id=u.id, name=u.name, email=u.email, role=u.role.value) for u in users]


@router.post(
    "/assign-global",
    response_model=AssignGlobalResponse,
    summary="Assign global menus to all users",
    description="Every id must reference a global menu; re-running is idempotent",
)
def assign_global(
    request: MenuIdsRequest,
    _caller: Caller = menu_manager_dependency,
    db: Session = db_dependency,
):
    user_count = user_menu_service.assign_global_menus_to_all_users(db, request.menu_ids)
    return AssignGlobalResponse(
        message=f"Menus assigned to {user_count} users successfully",
        user_count=user_count,
        menu_count=len(set(request.menu_ids)),
    )


@router.get(
    "/user/{user_id}",
    response_model=UserMenuAssignmentsResponse,
    summary="Get a user's menu assignments",
    description="Assigned menu ids plus every candidate menu (global and assigned)",
)
def get_user_menus(
    user_id: str,
    _caller: Caller = menu_manager_dependency,
    db: Session = db_dependency,
):
    assigned_ids, menus = user_menu_service.get_user_menu_assignments(db, user_id)
    return UserMenuAssignmentsResponse(
        assigned_menu_ids=assigned_ids,
        all_menus=[MenuSchema.from_menu(menu) for menu in menus],
    )


@router.post(
    "/user/{user_id}",
    response_model=MessageResponse,
    summary="Replace a user's menu assignments",
)
def assign_user_menus(
    user_id: str,
    request: MenuIdsRequest,
    _caller: Caller = menu_manager_dependency,
    db: Session = db_dependency,
):
    user_menu_service.assign_menus_to_user(db, user_id, request.menu_ids)
    return {"message": "Menus assigned successfully"}


@router.post(
    "/user/{user_id}/menu",
    response_model=MenuSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user-specific menu",
    description="Creates a non-global menu item and assigns it to the user",
)
def create_user_menu(
    user_id: str,
    request: UserMenuCreateRequest,
    _caller: Caller = menu_manager_dependency,
    db: Session = db_dependency,
):
    menu = user_menu_service.create_user_specific_menu(db, user_id, request)
    return MenuSchema.from_menu(menu)
