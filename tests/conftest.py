import os
from types import SimpleNamespace

# Point the app at a throwaway SQLite file before anything imports app.db
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_PARALLELISM", "1")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.db import SessionLocal  # noqa: E402
from app.db.init_db import drop_db, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.menu import Menu, MenuType, UserMenu  # noqa: E402
from app.models.user import User, UserRole  # noqa: E402
from app.utils.auth import create_access_token  # noqa: E402
from app.utils.ids import new_object_id  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    drop_db()
    init_db()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Insert a user and return its id, email and auth headers."""
    counter = {"n": 0}

    def _make(role: UserRole = UserRole.user, name: str | None = None, email: str | None = None):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            id=new_object_id(),
            email=email or f"{role.value}{n}@example.com",
            name=name or f"{role.value.title()} {n}",
            password_hash="not-a-real-hash",
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        token = create_access_token(user)
        return SimpleNamespace(
            id=user.id,
            email=user.email,
            name=user.name,
            role=role,
            headers={"Authorization": f"Bearer {token}"},
        )

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.admin)


@pytest.fixture
def make_menu(db):
    """Insert a menu row directly, bypassing the structural checks."""

    def _make(name: str, *, parent_id=None, order: int = 0, is_global: bool = True, user_id=None, assign_to=()):
        menu_id = new_object_id()
        menu = Menu(
            id=menu_id,
            name=name,
            link=f"/{name.lower().replace(' ', '-')}",
            menu_type=MenuType.link,
            parent_id=parent_id,
            order=order,
            is_global=is_global,
            user_id=user_id,
        )
        db.add(menu)
        for assignee in assign_to:
            db.add(UserMenu(id=new_object_id(), user_id=assignee, menu_id=menu_id))
        db.commit()
        return menu_id

    return _make
