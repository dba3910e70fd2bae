"""
Router for location categories.

Filter menus reference categories by id; reads are public, writes are admin only.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db import commit_or_raise, get_db
from app.dependencies.authz import Caller, require_admin
from app.models.category import Category
from app.schemas.category_schemas import CategoryCreateRequest, CategorySchema, CategoryUpdateRequest
from app.schemas.menu_schemas import MessageResponse
from app.utils.exceptions import NotFound, ValidationFailed
from app.utils.ids import new_object_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["Categories"])

db_dependency = Depends(get_db)
admin_dependency = Depends(require_admin)


def _get_category(db: Session, category_id: str) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFound("Category not found")
    return category


def _name_taken(db: Session, name: str, exclude_id: str | None = None) -> bool:
    query = db.query(Category.id).filter(Category.name == name)
    if exclude_id:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


@router.get("", response_model=list[CategorySchema], summary="List categories")
def list_categories(db: Session = db_dependency):
    return db.query(Category).order_by(Category.created_at.desc(), Category.id.desc()).all()


@router.get("/{category_id}", response_model=CategorySchema, summary="Get category")
def get_category(category_id: str, db: Session = db_dependency):
    return _get_category(db, category_id)


@router.post(
    "",
    response_model=CategorySchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create category (Admin only)",
)
def create_category(
    request: CategoryCreateRequest,
    _caller: Caller = admin_dependency,
    db: Session = db_dependency,
):
    if _name_taken(db, request.name):
        raise ValidationFailed("Category already exists")
    category = Category(id=new_object_id(), name=request.name, description=request.description)
    db.add(category)
    commit_or_raise(db, "create category")
    db.refresh(category)
    logger.info(f"Created category {category.id}")
    return category


@router.put("/{category_id}", response_model=CategorySchema, summary="Update category (Admin only)")
def update_category(
    category_id: str,
    request: CategoryUpdateRequest,
    _caller: Caller = admin_dependency,
    db: Session = db_dependency,
):
    category = _get_category(db, category_id)
    if request.name:
        if _name_taken(db, request.name, exclude_id=category.id):
            raise ValidationFailed("Category name already exists")
        category.name = request.name
    if "description" in request.model_fields_set:
        category.description = request.description
    commit_or_raise(db, "update category")
    db.refresh(category)
    return category


@router.delete("/{category_id}", response_model=MessageResponse, summary="Delete category (Admin only)")
def delete_category(
    category_id: str,
    _caller: Caller = admin_dependency,
    db: Session = db_dependency,
):
    category = _get_category(db, category_id)
    db.delete(category)
    commit_or_raise(db, "delete category")
    logger.info(f"Deleted category {category_id}")
    return {"message": "Category deleted successfully"}
