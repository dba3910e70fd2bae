"""
Per-user menu assignments.

Every batch operation validates all referenced ids first and writes inside a
single transaction, so an invalid id leaves existing assignments untouched.
"""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.db import commit_or_raise
from app.models.menu import Menu, UserMenu
from app.models.user import User
from app.schemas.menu_schemas import UserMenuCreateRequest
from app.services.menu_service import build_menu, require_user
from app.utils.exceptions import NotFound, ValidationFailed
from app.utils.ids import new_object_id

logger = logging.getLogger(__name__)


def _unique(ids: list[str]) -> list[str]:
    return list(dict.fromkeys(ids))


def _existing_menus(db: Session, menu_ids: list[str]) -> dict[str, Menu]:
    if not menu_ids:
        return {}
    rows = db.query(Menu).filter(Menu.id.in_(menu_ids)).all()
    return {menu.id: menu for menu in rows}


def _require_menus(db: Session, menu_ids: list[str]) -> dict[str, Menu]:
    found = _existing_menus(db, menu_ids)
    missing = [menu_id for menu_id in menu_ids if menu_id not in found]
    if missing:
        raise NotFound(
            "Some menus not found",
            errors=[{"field": "menuIds", "value": menu_id, "message": "Menu not found"} for menu_id in missing],
        )
    return found


def list_assignable_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.name.asc(), User.email.asc()).all()


def get_assigned_menu_ids(db: Session, user_id: str) -> list[str]:
    rows = db.query(UserMenu.menu_id).filter(UserMenu.user_id == user_id).order_by(UserMenu.created_at.asc()).all()
    return [row.menu_id for row in rows]


def get_user_menu_assignments(db: Session, user_id: str) -> tuple[list[str], list[Menu]]:
    """Return (assigned menu ids, global menus plus assigned menus)."""
    require_user(db, user_id)
    assigned_ids = get_assigned_menu_ids(db, user_id)
    condition = Menu.is_global == True  # noqa: E712
    if assigned_ids:
        condition = or_(condition, Menu.id.in_(assigned_ids))
    menus = db.query(Menu).filter(condition).order_by(Menu.order.asc(), Menu.created_at.asc(), Menu.id.asc()).all()
    return assigned_ids, menus


def assign_menus_to_user(db: Session, user_id: str, menu_ids: list[str]) -> list[str]:
    """Replace the user's whole assignment set with `menu_ids`."""
    require_user(db, user_id)
    menu_ids = _unique(menu_ids)
    _require_menus(db, menu_ids)

    db.query(UserMenu).filter(UserMenu.user_id == user_id).delete(synchronize_session=False)
    db.add_all([UserMenu(id=new_object_id(), user_id=user_id, menu_id=menu_id) for menu_id in menu_ids])
    commit_or_raise(db, "assign menus to user")
    logger.info(f"Assigned {len(menu_ids)} menus to user {user_id}")
    return menu_ids


def assign_global_menus_to_all_users(db: Session, menu_ids: list[str]) -> int:
    """
    Assign global menus to every user.

    Existing rows for exactly these menus are removed before the new rows are
    inserted, so running it twice leaves one row per (user, menu).
    Returns the number of users.
    """
    menu_ids = _unique(menu_ids)
    found = _require_menus(db, menu_ids)
    not_global = [menu_id for menu_id in menu_ids if not found[menu_id].is_global]
    if not_global:
        raise ValidationFailed(
            "Some menus are not global",
            errors=[{"field": "menuIds", "value": menu_id, "message": "Menu is not global"} for menu_id in not_global],
        )

    user_ids = [row.id for row in db.query(User.id).all()]
    if menu_ids:
        db.query(UserMenu).filter(UserMenu.menu_id.in_(menu_ids)).delete(synchronize_session=False)
    db.add_all(
        [UserMenu(id=new_object_id(), user_id=user_id, menu_id=menu_id) for user_id in user_ids for menu_id in menu_ids]
    )
    commit_or_raise(db, "assign global menus")
    logger.info(f"Assigned {len(menu_ids)} global menus to {len(user_ids)} users")
    return len(user_ids)


def create_user_specific_menu(db: Session, user_id: str, data: UserMenuCreateRequest) -> Menu:
    """Create a non-global menu owned by `user_id` and assign it to that user."""
    require_user(db, user_id)
    menu = build_menu(db, data, is_global=False, user_id=user_id)
    db.add(UserMenu(id=new_object_id(), user_id=user_id, menu_id=menu.id))
    commit_or_raise(db, "create user menu")
    db.refresh(menu)
    logger.info(f"Created user-specific menu {menu.id} for user {user_id}")
    return menu
