"""
Menu visibility, tree building and structural validation.

Structural rules enforced before every write:
- a parent must exist and must itself be a root (two levels at most),
- an item cannot be its own parent,
- an item with children cannot become a child,
- an item with children cannot be deleted.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.db import commit_or_raise
from app.dependencies.authz import Caller
from app.dependencies.settings import get_settings
from app.models.menu import Menu, MenuType, UserMenu
from app.models.user import User
from app.schemas.menu_schemas import MenuCreateRequest, MenuFieldsRequest, MenuUpdateRequest
from app.services.menu_tree import MenuNode, assemble_menu_tree, count_nodes
from app.utils.exceptions import DepthExceeded, HasChildren, NotFound, SelfReference, ValidationFailed
from app.utils.ids import new_object_id

logger = logging.getLogger(__name__)


# ============================================================================
# Menu targets (link vs filter)
# ============================================================================


@dataclass(frozen=True)
class LinkTarget:
    link: str


@dataclass(frozen=True)
class FilterTarget:
    link: str = "/"
    province: str | None = None
    district: str | None = None
    categories: tuple[str, ...] | None = None


MenuTarget = LinkTarget | FilterTarget


def resolve_target(
    menu_type: MenuType,
    link: str | None,
    province: str | None = None,
    district: str | None = None,
    categories=None,
) -> MenuTarget:
    """Build the variant for `menu_type`, rejecting missing variant fields."""
    if menu_type == MenuType.filter:
        categories = tuple(dict.fromkeys(categories)) if categories else None
        province = province or None
        district = district or None
        if not (province or district or categories):
            raise ValidationFailed(
                "At least one filter (province, district, or category) is required for filter menu type",
                errors=[{"field": "menuType", "message": "filter menu requires filterProvince, filterDistrict or filterCategories"}],
            )
        return FilterTarget(link=link or "/", province=province, district=district, categories=categories)

    if not link:
        raise ValidationFailed(
            "Link is required for link menu type",
            errors=[{"field": "link", "message": "Link is required for link menu type"}],
        )
    return LinkTarget(link=link)


def apply_target(menu: Menu, target: MenuTarget) -> None:
    menu.link = target.link
    if isinstance(target, FilterTarget):
        menu.menu_type = MenuType.filter
        menu.filter_province = target.province
        menu.filter_district = target.district
        menu.filter_categories = list(target.categories) if target.categories else None
    else:
        menu.menu_type = MenuType.link
        menu.filter_province = None
        menu.filter_district = None
        menu.filter_categories = None


# ============================================================================
# Queries
# ============================================================================


def _ordered(query):
    return query.order_by(Menu.order.asc(), Menu.created_at.asc(), Menu.id.asc())


def resolve_visible_menus(db: Session, caller: Caller) -> list[Menu]:
    """
    Menu rows the caller may see, ordered by (order, created_at).

    Admins see every row. Everyone else sees global rows, and an
    authenticated caller additionally sees the rows assigned to them.
    """
    query = db.query(Menu)
    if not caller.is_admin:
        condition = Menu.is_global == True  # noqa: E712
        if not caller.is_anonymous:
            assigned = select(UserMenu.menu_id).where(UserMenu.user_id == caller.id)
            condition = or_(condition, Menu.id.in_(assigned))
        query = query.filter(condition)
    return _ordered(query).all()


def get_menu_tree(db: Session, caller: Caller) -> list[MenuNode]:
    rows = resolve_visible_menus(db, caller)
    roots = assemble_menu_tree(rows)

    log_level = logging.INFO if get_settings().menu_debug_logging else logging.DEBUG
    if logger.isEnabledFor(log_level):
        kind = "anonymous" if caller.is_anonymous else caller.role.value
        logger.log(log_level, f"Menu tree for {kind} caller {caller.id}: {len(rows)} rows, {len(roots)} roots")
    in_tree = count_nodes(roots)
    if in_tree != len(rows):
        logger.warning(f"Menu tree holds {in_tree} nodes but {len(rows)} rows were fetched")
    return roots


def list_menus(db: Session, is_global: bool | None = None) -> list[Menu]:
    query = db.query(Menu)
    if is_global is not None:
        query = query.filter(Menu.is_global == is_global)
    return _ordered(query).all()


def get_menu(db: Session, menu_id: str) -> Menu:
    menu = db.get(Menu, menu_id)
    if menu is None:
        raise NotFound("Menu not found")
    return menu


def has_children(db: Session, menu_id: str) -> bool:
    return db.query(Menu.id).filter(Menu.parent_id == menu_id).first() is not None


# ============================================================================
# Guard
# ============================================================================


def require_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationFailed("Menu name is required", errors=[{"field": "name", "message": "Menu name is required"}])
    return name


def require_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found", errors=[{"field": "userId", "value": user_id}])
    return user


def check_parent(db: Session, parent_id: str, menu: Menu | None = None) -> Menu:
    """Validate `parent_id` as the parent of a new item, or of `menu` on update."""
    if menu is not None and parent_id == menu.id:
        raise SelfReference()
    parent = db.get(Menu, parent_id)
    if parent is None:
        raise NotFound("Parent menu not found", errors=[{"field": "parent", "value": parent_id}])
    if parent.parent_id:
        raise DepthExceeded()
    if menu is not None and has_children(db, menu.id):
        raise DepthExceeded("Cannot nest more than 2 levels: menu has submenus")
    return parent


def check_deletable(db: Session, menu: Menu) -> None:
    if has_children(db, menu.id):
        raise HasChildren()


# ============================================================================
# Mutations
# ============================================================================


def build_menu(db: Session, data: MenuFieldsRequest, *, is_global: bool, user_id: str | None) -> Menu:
    """Validate `data` and add a new, uncommitted menu row to the session."""
    name = require_name(data.name)
    target = resolve_target(
        data.menu_type or MenuType.link,
        data.link,
        data.filter_province,
        data.filter_district,
        data.filter_categories,
    )
    if data.parent:
        check_parent(db, data.parent)

    menu = Menu(
        id=new_object_id(),
        name=name,
        parent_id=data.parent,
        order=data.order or 0,
        is_global=is_global,
        user_id=user_id,
    )
    apply_target(menu, target)
    db.add(menu)
    return menu


def create_menu(db: Session, data: MenuCreateRequest) -> Menu:
    if data.user_id:
        require_user(db, data.user_id)
    is_global = True if data.is_global is None else data.is_global
    menu = build_menu(db, data, is_global=is_global, user_id=data.user_id)
    commit_or_raise(db, "create menu")
    db.refresh(menu)
    logger.info(f"Created menu {menu.id} ({menu.menu_type.value}) parent={menu.parent_id} global={menu.is_global}")
    return menu


def update_menu(db: Session, menu_id: str, data: MenuUpdateRequest) -> Menu:
    menu = get_menu(db, menu_id)
    provided = data.model_fields_set

    name = require_name(data.name) if "name" in provided else menu.name

    menu_type = data.menu_type if data.menu_type is not None else menu.menu_type
    if menu_type == MenuType.filter:
        link = data.link if "link" in provided and data.link else "/"
    else:
        link = data.link if "link" in provided else menu.link
    province = data.filter_province if "filter_province" in provided else menu.filter_province
    district = data.filter_district if "filter_district" in provided else menu.filter_district
    categories = data.filter_categories if "filter_categories" in provided else menu.filter_categories
    target = resolve_target(menu_type, link, province, district, categories)

    parent_id = menu.parent_id
    if "parent" in provided:
        parent_id = data.parent
        if parent_id:
            check_parent(db, parent_id, menu)

    menu.name = name
    apply_target(menu, target)
    menu.parent_id = parent_id
    if "order" in provided and data.order is not None:
        menu.order = data.order

    commit_or_raise(db, "update menu")
    db.refresh(menu)
    logger.info(f"Updated menu {menu.id} fields={sorted(provided)}")
    return menu


def delete_menu(db: Session, menu_id: str) -> None:
    menu = get_menu(db, menu_id)
    check_deletable(db, menu)
    db.delete(menu)
    commit_or_raise(db, "delete menu")
    logger.info(f"Deleted menu {menu_id}")
