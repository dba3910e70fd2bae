from app.models.user import UserRole
from app.utils.ids import new_object_id


def test_admin_crud_cycle(client, admin):
    created = client.post("/api/categories", json={"name": " Beach ", "description": "Sand"}, headers=admin.headers)
    assert created.status_code == 201, created.text
    category = created.json()
    assert category["name"] == "Beach"

    assert client.get(f"/api/categories/{category['id']}").json()["description"] == "Sand"

    updated = client.put(f"/api/categories/{category['id']}", json={"name": "Beaches"}, headers=admin.headers)
    assert updated.status_code == 200
    assert updated.json()["name"] == "Beaches"
    assert updated.json()["description"] == "Sand"

    deleted = client.delete(f"/api/categories/{category['id']}", headers=admin.headers)
    assert deleted.json() == {"message": "Category deleted successfully"}
    assert client.get(f"/api/categories/{category['id']}").status_code == 404


def test_duplicate_name_is_rejected(client, admin):
    client.post("/api/categories", json={"name": "Temple"}, headers=admin.headers)
    resp = client.post("/api/categories", json={"name": "Temple"}, headers=admin.headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Category already exists"


def test_writes_are_admin_only(client, make_user):
    manager = make_user(UserRole.manager)
    resp = client.post("/api/categories", json={"name": "Cafe"}, headers=manager.headers)
    assert resp.status_code == 403


def test_list_is_public(client, admin):
    for name in ("One", "Two"):
        client.post("/api/categories", json={"name": name}, headers=admin.headers)
    resp = client.get("/api/categories")
    assert resp.status_code == 200
    assert {c["name"] for c in resp.json()} == {"One", "Two"}


def test_unknown_category(client):
    resp = client.get(f"/api/categories/{new_object_id()}")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Category not found"
