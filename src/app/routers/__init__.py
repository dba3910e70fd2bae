from . import (  # noqa: F401
    auth,
    categories,
    health,
    menus,
    user_menus,
    users,
)

__all__ = [
    "auth",
    "categories",
    "health",
    "menus",
    "user_menus",
    "users",
]
