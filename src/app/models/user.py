import enum
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Enum, String
from sqlalchemy.orm import relationship

from app.db import Base
from app.utils.ids import new_object_id


def _utc_now():
    """Helper function for SQLAlchemy default/onupdate."""
    return datetime.now(UTC)


class UserRole(enum.StrEnum):
    """Account roles (highest to lowest).

    - admin: full access, sees every menu item including other users' items.
    - staff: content moderation and menu management.
    - manager: submits locations for moderation, may manage menus.
    - user: regular account, sees global menus plus assigned ones.
    """

    admin = "admin"
    staff = "staff"
    manager = "manager"
    user = "user"


# Roles allowed to manage menus and menu assignments
MENU_MANAGER_ROLES: tuple[UserRole, ...] = (UserRole.admin, UserRole.staff, UserRole.manager)


class User(Base):
    __tablename__ = "users"
    id = Column(String(24), primary_key=True, default=new_object_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(150), nullable=False)
    password_hash = Column(String(256), nullable=False)
    role = Column(Enum(UserRole), default=UserRole.user, nullable=False, server_default="user")
    created_at = Column(DateTime, default=_utc_now, nullable=False)
    updated_at = Column(DateTime, default=_utc_now, onupdate=_utc_now, nullable=False)

    menu_assignments = relationship("UserMenu", back_populates="user", cascade="all, delete-orphan")
