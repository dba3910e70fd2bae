from .category import Category
from .menu import Menu, MenuType, UserMenu
from .user import User, UserRole

__all__ = [
    "User",
    "UserRole",
    "Category",
    "Menu",
    "MenuType",
    "UserMenu",
]
