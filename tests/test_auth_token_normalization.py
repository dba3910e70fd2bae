from types import SimpleNamespace

import jwt
import pytest
from fastapi.security import HTTPAuthorizationCredentials

from app.dependencies.authz import ANONYMOUS, get_current_user, get_optional_user
from app.models.user import UserRole
from app.utils import auth as auth_utils
from app.utils.exceptions import Unauthorized
from app.utils.roles import normalize_role


def _user(role=UserRole.manager):
    return SimpleNamespace(id="a" * 24, email="norm@example.com", role=role)


def _cred(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_token_roundtrip():
    token = auth_utils.create_access_token(_user())
    payload = auth_utils.decode_jwt(token)
    assert payload is not None
    assert payload["sub"] == "a" * 24
    assert payload["role"] == "manager"
    assert payload["type"] == "access"


def test_decode_rejects_prefixed_and_quoted_tokens():
    token = auth_utils.create_access_token(_user())
    assert auth_utils.decode_jwt(f"Bearer {token}") is None
    assert auth_utils.decode_jwt(f'"{token}"') is None


def test_pasted_bearer_prefix_is_tolerated():
    token = auth_utils.create_access_token(_user())
    caller = get_current_user(_cred(f"Bearer {token}"))
    assert caller.id == "a" * 24
    assert caller.role is UserRole.manager


def test_role_claim_is_normalized():
    token = jwt.encode(
        {"sub": "b" * 24, "role": " ADMIN ", "type": "access"},
        auth_utils.JWT_SECRET,
        algorithm=auth_utils.JWT_ALG,
    )
    caller = get_current_user(_cred(token))
    assert caller.is_admin


def test_unknown_role_is_rejected():
    token = jwt.encode({"sub": "b" * 24, "role": "root", "type": "access"}, auth_utils.JWT_SECRET, algorithm=auth_utils.JWT_ALG)
    with pytest.raises(Unauthorized):
        get_current_user(_cred(token))
    assert get_optional_user(_cred(token)) is ANONYMOUS


def test_expired_token_is_rejected():
    token = auth_utils.create_access_token(_user(), ttl=-10)
    with pytest.raises(Unauthorized):
        get_current_user(_cred(token))


def test_missing_credentials():
    with pytest.raises(Unauthorized):
        get_current_user(None)
    assert get_optional_user(None).is_anonymous


@pytest.mark.parametrize(
    "value, expected",
    [(UserRole.staff, UserRole.staff), ("Staff", UserRole.staff), ("user", UserRole.user), ("nope", None), (None, None)],
)
def test_normalize_role(value, expected):
    assert normalize_role(value) == expected
