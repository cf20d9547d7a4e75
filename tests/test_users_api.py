from conftest import headers_for, PASSWORD
from stocktrack.core.permissions import Role


NEW_USER = {
    "employee_id": "E-7",
    "username": "mira",
    "email": "mira@example.com",
    "password": "start123",
    "phone_number": "0100",
    "job_start_date": "2024-01-15",
    "role": "NORMAL_ADMIN",
    "permissions": {"stockIn": ["view", "create"]},
}


def test_login_and_me(client, super_admin):
    r = client.post("/api/auth/login", json={"email": "BOSS@example.com", "password": PASSWORD})
    assert r.status_code == 200
    body = r.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["role"] == "SUPER_ADMIN"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "boss@example.com"


def test_login_wrong_password(client, super_admin):
    r = client.post("/api/auth/login", json={"email": "boss@example.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid email or password"


def test_login_inactive_account(client, make_user):
    make_user("left@example.com", is_active=False)
    r = client.post("/api/auth/login", json={"email": "left@example.com", "password": PASSWORD})
    assert r.status_code == 401


def test_garbage_token_is_unauthenticated(client):
    r = client.get("/api/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_super_admin_creates_updates_deletes_user(client, admin_headers):
    r = client.post("/api/users", json=NEW_USER, headers=admin_headers)
    assert r.status_code == 200
    created = r.json()
    assert created["permissions"]["stockIn"] == ["view", "create"]
    assert created["permissions"]["service"] == []

    r = client.post("/api/users", json={**NEW_USER, "email": "MIRA@example.com"}, headers=admin_headers)
    assert r.status_code == 400

    r = client.put(f"/api/users/{created['id']}", json={"role": "SUPER_ADMIN", "is_active": False},
                   headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["role"] == "SUPER_ADMIN"
    assert r.json()["is_active"] is False

    r = client.delete(f"/api/users/{created['id']}", headers=admin_headers)
    assert r.status_code == 200


def test_invalid_permission_map_is_rejected(client, admin_headers):
    r = client.post("/api/users", json={**NEW_USER, "permissions": {"payroll": ["view"]}}, headers=admin_headers)
    assert r.status_code == 400


def test_normal_admin_cannot_manage_users(client, make_user, super_admin):
    normal = make_user("normal@example.com", permissions={
        "service": ["view", "create", "edit", "delete"],
        "stockOut": ["view", "create", "edit", "delete"],
    })
    headers = headers_for(normal)

    assert client.post("/api/users", json=NEW_USER, headers=headers).status_code == 401
    assert client.put(f"/api/users/{super_admin.id}", json={"role": "NORMAL_ADMIN"},
                      headers=headers).status_code == 401
    assert client.delete(f"/api/users/{super_admin.id}", headers=headers).status_code == 401


def test_user_list_hides_permissions_from_normal_admin(client, make_user, admin_headers):
    normal = make_user("normal@example.com", permissions={"product": ["view"]})

    as_normal = client.get("/api/users", headers=headers_for(normal)).json()
    assert all("permissions" not in u for u in as_normal)

    as_super = client.get("/api/users", headers=admin_headers).json()
    assert all("permissions" in u for u in as_super)


def test_user_list_active_filter(client, make_user, admin_headers):
    make_user("old@example.com", is_active=False)
    emails = {u["email"] for u in client.get("/api/users?active_only=true", headers=admin_headers).json()}
    assert "old@example.com" not in emails
    assert "boss@example.com" in emails


def test_normal_admin_profile_edit_is_limited(client, make_user):
    normal = make_user("normal@example.com")
    headers = headers_for(normal)

    r = client.put("/api/user", json={"phone_number": "555", "nid_number": "N-1"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["phone_number"] == "555"

    r = client.put("/api/user", json={"role": "SUPER_ADMIN"}, headers=headers)
    assert r.status_code == 401
    assert client.get("/api/user", headers=headers).json()["role"] == "NORMAL_ADMIN"


def test_super_admin_profile_edit(client, admin_headers):
    r = client.put("/api/user", json={"username": "chief", "job_start_date": "2020-05-01"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["username"] == "chief"
    assert r.json()["job_start_date"] == "2020-05-01"


def test_change_password(client, make_user):
    user = make_user("pw@example.com")
    headers = headers_for(user)

    r = client.post("/api/user/change-password", json={"old_password": "wrong", "new_password": "another1"},
                    headers=headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Current password is incorrect"

    r = client.post("/api/user/change-password", json={"old_password": PASSWORD, "new_password": "another1"},
                    headers=headers)
    assert r.status_code == 200

    r = client.post("/api/auth/login", json={"email": "pw@example.com", "password": "another1"})
    assert r.status_code == 200


def test_own_permissions(client, make_user):
    user = make_user("perm@example.com", permissions={"stock_out": ["create"]})
    r = client.get("/api/user/permissions", headers=headers_for(user))
    assert r.json()["permissions"]["stockOut"] == ["create"]


def test_user_with_records_cannot_be_deleted(client, admin_headers, make_user, db, catalog):
    from stocktrack.models import Service
    author = make_user("author@example.com", role=Role.NORMAL_ADMIN)
    db.add(Service(name="Massage", created_by_id=author.id))
    db.commit()

    r = client.delete(f"/api/users/{author.id}", headers=admin_headers)
    assert r.status_code == 400


def test_last_super_admin_cannot_demote_or_deactivate_self(client, super_admin, admin_headers):
    r = client.put(f"/api/users/{super_admin.id}", json={"role": "NORMAL_ADMIN"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Cannot demote or deactivate the last active super admin"

    r = client.put("/api/user", json={"is_active": False}, headers=admin_headers)
    assert r.status_code == 400

    me = client.get("/api/user", headers=admin_headers).json()
    assert (me["role"], me["is_active"]) == ("SUPER_ADMIN", True)


def test_super_admin_can_step_down_when_another_remains(client, make_user, super_admin, admin_headers):
    make_user("deputy@example.com", role=Role.SUPER_ADMIN)
    r = client.put("/api/user", json={"role": "NORMAL_ADMIN"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["role"] == "NORMAL_ADMIN"
