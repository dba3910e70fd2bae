"""
Router for account management.

Admins list, create, edit and delete accounts of any role. Staff may also
reset a manager's password.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db import commit_or_raise, get_db
from app.dependencies.authz import Caller, require_admin, require_roles
from app.models.menu import Menu
from app.models.user import User, UserRole
from app.schemas.auth_schemas import UserResponse
from app.schemas.menu_schemas import MessageResponse
from app.schemas.user_schemas import PasswordResetRequest, UserCreateRequest, UserUpdateRequest
from app.utils import auth as auth_utils
from app.utils.exceptions import NotFound, ValidationFailed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])

db_dependency = Depends(get_db)
admin_dependency = Depends(require_admin)
password_reset_dependency = Depends(require_roles(UserRole.admin, UserRole.staff))


def _get_user(db: Session, user_id: str) -> User:
    user = auth_utils.get_user_by_id(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


@router.get("", response_model=list[UserResponse], summary="List users (Admin only)")
def list_users(
    role: UserRole | None = Query(None, description="Only accounts with this role"),
    _caller: Caller = admin_dependency,
    db: Session = db_dependency,
):
    query = db.query(User)
    if role is not None:
        query = query.filter(User.role == role)
    return query.order_by(User.created_at.desc(), User.id.desc()).all()


@router.get("/{user_id}", response_model=UserResponse, summary="Get user (Admin only)")
def get_user(user_id: str, _caller: Caller = admin_dependency, db: Session = db_dependency):
    return _get_user(db, user_id)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user (Admin only)",
)
def create_user(
    request: UserCreateRequest,
    _caller: Caller = admin_dependency,
    db: Session = db_dependency,
):
    if auth_utils.get_user_by_email(db, request.email):
        raise ValidationFailed("User already exists")
    user = auth_utils.create_user(db, request.email, request.password, request.name, role=request.role)
    logger.info(f"Created user {user.id} with role {user.role.value}")
    return user


@router.put("/{user_id}", response_model=UserResponse, summary="Update user (Admin only)")
def update_user(
    user_id: str,
    request: UserUpdateRequest,
    _caller: Caller = admin_dependency,
    db: Session = db_dependency,
):
    user = _get_user(db, user_id)
    if request.email:
        existing = auth_utils.get_user_by_email(db, request.email)
        if existing is not None and existing.id != user.id:
            raise ValidationFailed("Email already exists")
        user.email = request.email
    if request.name:
        user.name = request.name
    if request.role is not None:
        user.role = request.role
    commit_or_raise(db, "update user")
    db.refresh(user)
    return user


@router.patch(
    "/{user_id}/reset-password",
    response_model=MessageResponse,
    summary="Reset a manager's password (Admin/Staff)",
)
def reset_password(
    user_id: str,
    request: PasswordResetRequest,
    _caller: Caller = password_reset_dependency,
    db: Session = db_dependency,
):
    user = _get_user(db, user_id)
    if user.role != UserRole.manager:
        raise ValidationFailed("Can only reset password for managers")
    user.password_hash = auth_utils.hash_password(request.new_password)
    commit_or_raise(db, "reset password")
    logger.info(f"Reset password for manager {user_id}")
    return {"message": "Password reset successfully"}


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete user (Admin only)")
def delete_user(
    user_id: str,
    _caller: Caller = admin_dependency,
    db: Session = db_dependency,
):
    user = _get_user(db, user_id)
    # Owned menus stay; only the owner reference is cleared
    db.query(Menu).filter(Menu.user_id == user_id).update({Menu.user_id: None}, synchronize_session=False)
    db.delete(user)
    commit_or_raise(db, "delete user")
    logger.info(f"Deleted user {user_id}")
    return {"message": "User deleted successfully"}
