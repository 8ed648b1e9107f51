"""
Admin auth tests — register, login, /me.
"""


def _register(client, email="ops@easemyexpo.in", password="longenough1", headers=None):
    return client.post("/api/auth/register", json={"email": email, "password": password}, headers=headers)


def _bearer(resp):
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def test_register_returns_token_without_hash(client):
    resp = _register(client)
    assert resp.status_code == 200
    data = resp.json()
    assert data["token_type"] == "bearer"
    assert data["admin"]["email"] == "ops@easemyexpo.in"
    assert "password_hash" not in data["admin"]


def test_register_duplicate_email_is_409(client):
    headers = _bearer(_register(client))
    assert _register(client, email="OPS@easemyexpo.in ", headers=headers).status_code == 409


def test_only_first_admin_registers_without_a_token(client):
    assert _register(client).status_code == 200

    anonymous = _register(client, email="anon@example.com")
    assert anonymous.status_code == 401
    assert client.post("/api/auth/login", json={
        "email": "anon@example.com", "password": "longenough1",
    }).status_code == 401


def test_admin_can_add_another_admin(client):
    headers = _bearer(_register(client))
    second = _register(client, email="sales@easemyexpo.in", headers=headers)
    assert second.status_code == 200
    resp = client.get("/api/admin/vendors/", headers=_bearer(second))
    assert resp.status_code == 200


def test_forged_token_cannot_register(client):
    _register(client)
    resp = _register(client, email="anon@example.com", headers={"Authorization": "Bearer junk"})
    assert resp.status_code == 401


def test_register_short_password_is_422(client):
    assert _register(client, password="short").status_code == 422


def test_login_and_me(client):
    _register(client)
    login = client.post("/api/auth/login", json={"email": "ops@easemyexpo.in", "password": "longenough1"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    me = client.get("/api/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["email"] == "ops@easemyexpo.in"


def test_login_wrong_password_is_401(client):
    _register(client)
    resp = client.post("/api/auth/login", json={"email": "ops@easemyexpo.in", "password": "wrongpassword"})
    assert resp.status_code == 401


def test_disabled_admin_is_rejected(client, db):
    from expo_estimator import models

    token = _register(client).json()["access_token"]
    admin = db.query(models.AdminUser).first()
    admin.is_active = False
    db.commit()

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 401
    login = client.post("/api/auth/login", json={"email": "ops@easemyexpo.in", "password": "longenough1"})
    assert login.status_code == 401


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
