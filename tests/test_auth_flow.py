from app.models.user import UserRole


def _register(client, **body):
    body.setdefault("email", "jane@example.com")
    body.setdefault("password", "secret123")
    body.setdefault("name", "Jane")
    return client.post("/api/auth/register", json=body)


def test_register_login_and_me(client):
    resp = _register(client, email="  Jane@Example.com ")
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["tokenType"] == "bearer"
    assert data["user"]["email"] == "jane@example.com"
    assert data["user"]["role"] == "user"

    login = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "secret123"})
    assert login.status_code == 200, login.text
    token = login.json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["id"] == data["user"]["id"]
    assert me.json()["name"] == "Jane"


def test_register_duplicate_email(client):
    assert _register(client).status_code == 201
    resp = _register(client)
    assert resp.status_code == 400
    assert resp.json()["message"] == "User already exists"


def test_register_as_manager_is_allowed(client):
    resp = _register(client, role="manager")
    assert resp.status_code == 201
    assert resp.json()["user"]["role"] == "manager"


def test_register_as_admin_is_forbidden(client):
    for role in (UserRole.admin, UserRole.staff):
        resp = _register(client, email=f"{role.value}@example.com", role=role.value)
        assert resp.status_code == 403


def test_register_validates_body(client):
    resp = _register(client, email="not-an-email", password="123")
    assert resp.status_code == 400
    fields = {err["field"] for err in resp.json()["errors"]}
    assert {"email", "password"} <= fields


def test_login_with_wrong_password(client):
    _register(client)
    resp = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "wrong"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid credentials"


def test_me_requires_token(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


def test_registered_manager_can_manage_menus(client):
    token = _register(client, role="manager").json()["token"]
    resp = client.post(
        "/api/menus",
        json={"name": "Home", "link": "/"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 201
