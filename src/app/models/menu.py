"""
Navigation menu models.

Menus form a two-level tree through a back-reference (`parent_id`) on the
child row. Items are either global (visible to every caller) or user-scoped,
in which case visibility comes from `UserMenu` assignment rows.
"""

import enum
from datetime import UTC, datetime

from sqlalchemy import JSON, BigInteger, Boolean, Column, DateTime, Enum, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db import Base
from app.utils.ids import new_object_id


def _utc_now():
    return datetime.now(UTC)


class MenuType(enum.StrEnum):
    link = "link"
    filter = "filter"


class Menu(Base):
    __tablename__ = "menus"

    id = Column(String(24), primary_key=True, default=new_object_id)
    name = Column(String(200), nullable=False)
    link = Column(String(500), nullable=False, default="/")
    menu_type = Column(Enum(MenuType), nullable=False, default=MenuType.link, server_default="link")
    filter_province = Column(String(200), nullable=True)
    filter_district = Column(String(200), nullable=True)
    filter_categories = Column(JSON, nullable=True)  # ordered list of category ids
    parent_id = Column(String(24), ForeignKey("menus.id"), nullable=True, index=True)
    order = Column(BigInteger, nullable=False, default=0, server_default="0")
    is_global = Column(Boolean, nullable=False, default=True, server_default="true")
    user_id = Column(String(24), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=_utc_now, nullable=False)
    updated_at = Column(DateTime, default=_utc_now, onupdate=_utc_now, nullable=False)

    parent = relationship("Menu", remote_side=[id])
    owner = relationship("User")
    assignments = relationship("UserMenu", back_populates="menu", cascade="all, delete-orphan")

    __table_args__ = (Index("ix_menus_parent_order", "parent_id", "order"),)


class UserMenu(Base):
    """
    Assignment of a menu item to a user.
    """

    __tablename__ = "user_menus"

    id = Column(String(24), primary_key=True, default=new_object_id)
    user_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_id = Column(String(24), ForeignKey("menus.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=_utc_now, nullable=False)

    user = relationship("User", back_populates="menu_assignments")
    menu = relationship("Menu", back_populates="assignments")

    __table_args__ = (UniqueConstraint("user_id", "menu_id", name="uq_user_menu"),)
