from __future__ import annotations

from app.models.user import UserRole


def normalize_role(value) -> UserRole | None:
    """Map a role claim onto the UserRole enum.

    Tokens may carry the role as the enum itself, its value, or a differently
    cased string. Unknown values return None so callers can reject them.
    """
    if isinstance(value, UserRole):
        return value
    if not isinstance(value, str):
        return None
    try:
        return UserRole(value.strip().lower())
    except ValueError:
        return None


def is_admin_role(role: UserRole | None) -> bool:
    return role == UserRole.admin
