from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.models.user import UserRole
from app.utils.auth import decode_jwt
from app.utils.exceptions import Forbidden, Unauthorized
from app.utils.roles import is_admin_role, normalize_role

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    """Identity of the request's caller, built from verified token claims.

    An anonymous caller has neither id nor role.
    """

    id: str | None = None
    email: str | None = None
    role: UserRole | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.id is None

    @property
    def is_admin(self) -> bool:
        return is_admin_role(self.role)


ANONYMOUS = Caller()

# Module-level dependency object to avoid calling Depends() in function defaults
bearer_dep = Depends(bearer)


def _extract_token(cred: HTTPAuthorizationCredentials | None) -> str | None:
    if cred is None or cred.scheme.lower() != "bearer":
        return None
    # Swagger UI users sometimes paste the literal "Bearer <token>" as the value
    token = cred.credentials
    if isinstance(token, str) and token.lower().startswith("bearer "):
        token = token.split(" ", 1)[1]
    return token or None


def _caller_from_token(token: str) -> Caller | None:
    payload = decode_jwt(token)
    if not payload or payload.get("type") != "access":
        return None
    role = normalize_role(payload.get("role"))
    if not payload.get("sub") or role is None:
        return None
    return Caller(id=str(payload["sub"]), email=payload.get("email"), role=role)


def get_current_user(cred: HTTPAuthorizationCredentials | None = bearer_dep) -> Caller:
    token = _extract_token(cred)
    if token is None:
        raise Unauthorized("No token, authorization denied")
    caller = _caller_from_token(token)
    if caller is None:
        raise Unauthorized("Token is not valid")
    return caller


def get_optional_user(cred: HTTPAuthorizationCredentials | None = bearer_dep) -> Caller:
    """Resolve the caller when a valid token is present, anonymous otherwise."""
    token = _extract_token(cred)
    if token is None:
        return ANONYMOUS
    return _caller_from_token(token) or ANONYMOUS


# Module-level dependency object to avoid calling Depends() in function defaults
current_user_dependency = Depends(get_current_user)


def require_roles(*roles: UserRole):
    allowed = frozenset(roles)

    def checker(caller: Caller = current_user_dependency) -> Caller:
        if caller.role not in allowed:
            raise Forbidden()
        return caller

    return checker


def require_admin(caller: Caller = current_user_dependency) -> Caller:
    if not caller.is_admin:
        raise Forbidden("admin privileges required")
    return caller
