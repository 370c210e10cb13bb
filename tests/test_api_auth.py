from __future__ import annotations

from tender_tracker.core.constants import SESSION_COOKIE_NAME


def test_login_then_me_returns_same_user(client, admin_user, login_as):
    resp = login_as(client, "admin", "admin-pass")
    assert resp.status_code == 200
    assert resp.get_json() == {"id": admin_user.id, "username": "admin", "isAdmin": True}

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.get_json()["username"] == "admin"
    assert "password" not in me.get_json()


def test_login_sets_http_only_cookie(client, admin_user, login_as):
    resp = login_as(client, "admin", "admin-pass")

    cookie = resp.headers["Set-Cookie"]
    assert cookie.startswith(f"{SESSION_COOKIE_NAME}=")
    assert "HttpOnly" in cookie
    assert "Expires=" in cookie


def test_wrong_password_returns_401_and_sets_no_session(client, admin_user, login_as):
    resp = login_as(client, "admin", "nope")

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Invalid username or password"}
    assert "Set-Cookie" not in resp.headers
    assert client.get("/api/auth/me").status_code == 401


def test_unknown_user_gets_same_message(client, login_as):
    resp = login_as(client, "ghost", "whatever")

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid username or password"


def test_login_validation_error_lists_fields(client):
    resp = client.post("/api/auth/login", json={"username": ""})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["message"] == "Validation error"
    assert sorted(e["field"] for e in body["errors"]) == ["password", "username"]


def test_me_without_session(client):
    resp = client.get("/api/auth/me")

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Not authenticated"}


def test_me_after_user_removed(admin_client, container, admin_user):
    container.users_repo.delete(admin_user.id)

    resp = admin_client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.get_json() == {"message": "User not found"}


def test_logout_destroys_session(admin_client, container):
    assert len(container.session_store) == 1

    resp = admin_client.post("/api/auth/logout")

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Logged out successfully"}
    assert len(container.session_store) == 0
    assert admin_client.get("/api/auth/me").status_code == 401


def test_logout_store_failure_returns_500(admin_client, container, monkeypatch):
    def boom(sid):
        raise RuntimeError("store down")

    monkeypatch.setattr(container.session_store, "delete", boom)

    resp = admin_client.post("/api/auth/logout")
    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Failed to logout"}


def test_session_cookie_is_refreshed_on_each_request(admin_client):
    resp = admin_client.get("/api/auth/me")

    assert resp.status_code == 200
    assert SESSION_COOKIE_NAME in resp.headers.get("Set-Cookie", "")


def test_tampered_cookie_is_ignored(app, admin_user):
    c = app.test_client()
    c.set_cookie(SESSION_COOKIE_NAME, "forged.signature")

    assert c.get("/api/auth/me").status_code == 401


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["timestamp"].endswith("Z")


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert "message" in resp.get_json()


def test_database_sessions_work_end_to_end(sql_app, login_as):
    container = sql_app.extensions["tender_tracker"]
    with sql_app.app_context():
        container.user_service.create_user({"username": "admin", "password": "pw", "isAdmin": True})

    c = sql_app.test_client()
    assert login_as(c, "admin", "pw").status_code == 200
    assert c.get("/api/auth/me").get_json()["username"] == "admin"
    assert c.post("/api/auth/logout").status_code == 200
    assert c.get("/api/auth/me").status_code == 401
