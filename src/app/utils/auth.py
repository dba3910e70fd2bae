import logging
import os
import uuid
from datetime import UTC, datetime, timedelta

import jwt
from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher
from sqlalchemy.orm import Session

from app.db import commit_or_raise
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)

# === Config ===
JWT_SECRET = os.environ.get("JWT_SECRET", "change_this_secret")  # random 32-bytes | run in terminal: openssl rand -hex 32
JWT_ALG = os.environ.get("JWT_ALG", "HS256")
JWT_TTL_SECONDS = int(os.environ.get("JWT_TTL", str(7 * 86400)))  # access TTL, 7 days

# Argon2 tuning (adjust via env)
ARGON2_TIME_COST = int(os.environ.get("ARGON2_TIME_COST", "2"))
ARGON2_MEMORY_COST = int(os.environ.get("ARGON2_MEMORY_COST", str(32_768)))  # KiB
ARGON2_PARALLELISM = int(os.environ.get("ARGON2_PARALLELISM", "2"))

password_hasher = PasswordHash(
    (
        Argon2Hasher(
            time_cost=ARGON2_TIME_COST,
            memory_cost=ARGON2_MEMORY_COST,
            parallelism=ARGON2_PARALLELISM,
        ),
    )
)


def hash_password(password: str) -> str:
    return password_hasher.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return password_hasher.verify(plain, hashed)
    except Exception:
        return False


def create_access_token(user: User, ttl: int | None = None) -> str:
    now = datetime.now(UTC)
    exp = now + timedelta(seconds=(ttl or JWT_TTL_SECONDS))
    role = user.role.value if isinstance(user.role, UserRole) else str(user.role)
    payload = {
        "sub": user.id,
        "email": user.email,
        "role": role,
        "type": "access",
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)


def decode_jwt(token: str) -> dict | None:
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])
    except jwt.ExpiredSignatureError:
        logger.debug("JWT decode failed: token expired")
        return None
    except jwt.InvalidTokenError as exc:
        logger.debug("JWT decode failed: invalid token (%s)", exc)
        return None


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    normalized = normalize_email(email)
    if not normalized:
        return None
    return db.query(User).filter(User.email == normalized).one_or_none()


def get_user_by_id(db: Session, user_id: str) -> User | None:
    if not user_id:
        return None
    return db.get(User, user_id)


def create_user(db: Session, email: str, password: str, name: str, role: UserRole = UserRole.user) -> User:
    user = User(
        email=normalize_email(email),
        password_hash=hash_password(password),
        name=name.strip(),
        role=role,
    )
    db.add(user)
    commit_or_raise(db, "create user")
    db.refresh(user)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if not user:
        return None
    if verify_password(password, user.password_hash):
        return user
    return None
