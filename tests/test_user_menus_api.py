from app.models.menu import UserMenu
from app.models.user import UserRole
from app.utils.ids import new_object_id


def test_list_assignable_users_sorted_by_name(client, admin, make_user):
    make_user(name="Zed")
    make_user(name="Amy")
    resp = client.get("/api/user-menus/users", headers=admin.headers)
    assert resp.status_code == 200
    names = [u["name"] for u in resp.json()]
    assert names == sorted(names)
    assert {"Zed", "Amy"} <= set(names)
    assert set(resp.json()[0]) == {"id", "name", "email", "role"}


def test_user_role_cannot_use_assignment_endpoints(client, make_user):
    user = make_user(UserRole.user)
    assert client.get("/api/user-menus/users", headers=user.headers).status_code == 403
    assert client.post("/api/user-menus/assign-global", json={"menuIds": []}).status_code == 401


def test_assign_replaces_previous_assignments(client, admin, make_user, make_menu):
    user = make_user()
    first = make_menu("First", is_global=False)
    second = make_menu("Second", is_global=False)

    resp = client.post(f"/api/user-menus/user/{user.id}", json={"menuIds": [first]}, headers=admin.headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Menus assigned successfully"}

    client.post(f"/api/user-menus/user/{user.id}", json={"menuIds": [second, second]}, headers=admin.headers)
    data = client.get(f"/api/user-menus/user/{user.id}", headers=admin.headers).json()
    assert data["assignedMenuIds"] == [second]
    assert [m["name"] for m in data["allMenus"]] == ["Second"]

    client.post(f"/api/user-menus/user/{user.id}", json={"menuIds": []}, headers=admin.headers)
    assert client.get(f"/api/user-menus/user/{user.id}", headers=admin.headers).json()["assignedMenuIds"] == []


def test_assign_with_unknown_menu_changes_nothing(client, admin, make_user, make_menu):
    user = make_user()
    kept = make_menu("Kept", is_global=False, assign_to=[user.id])
    missing = new_object_id()

    resp = client.post(f"/api/user-menus/user/{user.id}", json={"menuIds": [missing]}, headers=admin.headers)
    assert resp.status_code == 404
    body = resp.json()
    assert body["message"] == "Some menus not found"
    assert [err["value"] for err in body["errors"]] == [missing]

    data = client.get(f"/api/user-menus/user/{user.id}", headers=admin.headers).json()
    assert data["assignedMenuIds"] == [kept]


def test_assign_to_unknown_user_is_not_found(client, admin, make_menu):
    menu = make_menu("Any")
    resp = client.post(f"/api/user-menus/user/{new_object_id()}", json={"menuIds": [menu]}, headers=admin.headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "User not found"


def test_assign_rejects_malformed_ids(client, admin, make_user):
    user = make_user()
    resp = client.post(f"/api/user-menus/user/{user.id}", json={"menuIds": ["abc"]}, headers=admin.headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation failed"


def test_user_assignments_list_global_and_assigned(client, admin, make_user, make_menu):
    user = make_user()
    make_menu("Global", order=1)
    assigned = make_menu("Assigned", order=2, is_global=False, assign_to=[user.id])
    make_menu("Other", order=3, is_global=False)

    resp = client.get(f"/api/user-menus/user/{user.id}", headers=admin.headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["assignedMenuIds"] == [assigned]
    assert [m["name"] for m in data["allMenus"]] == ["Global", "Assigned"]


def test_assign_global_is_idempotent(client, admin, make_user, make_menu, db):
    make_user()
    make_user()
    menu = make_menu("Global")

    for _ in range(2):
        resp = client.post("/api/user-menus/assign-global", json={"menuIds": [menu]}, headers=admin.headers)
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["userCount"] == 3
        assert data["menuCount"] == 1
        assert data["message"] == "Menus assigned to 3 users successfully"

    rows = db.query(UserMenu).filter(UserMenu.menu_id == menu).all()
    assert len(rows) == 3
    assert len({row.user_id for row in rows}) == 3


def test_assign_global_rejects_user_specific_menu(client, admin, make_menu):
    private = make_menu("Private", is_global=False)
    resp = client.post("/api/user-menus/assign-global", json={"menuIds": [private]}, headers=admin.headers)
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Some menus are not global"
    assert body["errors"][0]["value"] == private


def test_assign_global_rejects_unknown_menu(client, admin):
    missing = new_object_id()
    resp = client.post("/api/user-menus/assign-global", json={"menuIds": [missing]}, headers=admin.headers)
    assert resp.status_code == 404


def test_create_user_specific_menu(client, admin, make_user):
    user = make_user()
    resp = client.post(
        f"/api/user-menus/user/{user.id}/menu",
        json={"name": "My Places", "link": "/mine"},
        headers=admin.headers,
    )
    assert resp.status_code == 201, resp.text
    menu = resp.json()
    assert menu["isGlobal"] is False
    assert menu["userId"] == user.id

    assignments = client.get(f"/api/user-menus/user/{user.id}", headers=admin.headers).json()
    assert assignments["assignedMenuIds"] == [menu["id"]]

    tree = client.get("/api/menus", headers=user.headers).json()
    assert [node["name"] for node in tree] == ["My Places"]
    assert client.get("/api/menus").json() == []


def test_create_user_specific_menu_respects_depth(client, admin, make_user, make_menu):
    user = make_user()
    root = make_menu("Root")
    child = make_menu("Child", parent_id=root)
    resp = client.post(
        f"/api/user-menus/user/{user.id}/menu",
        json={"name": "Deep", "link": "/deep", "parent": child},
        headers=admin.headers,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Cannot nest more than 2 levels"


def test_create_user_specific_menu_for_unknown_user(client, admin):
    resp = client.post(
        f"/api/user-menus/user/{new_object_id()}/menu",
        json={"name": "Ghost", "link": "/ghost"},
        headers=admin.headers,
    )
    assert resp.status_code == 404
