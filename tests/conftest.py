from __future__ import annotations

import pytest

from tender_tracker.main import create_app

ADMIN_PASSWORD = "admin-pass"
STAFF_PASSWORD = "staff-pass"


def tender_payload(**overrides) -> dict:
    payload = {
        "tenderNumber": "TND-2025-099",
        "clientName": "Acme",
        "description": "x",
        "briefingDate": "2025-03-01T10:00:00Z",
        "submissionDate": "2025-03-10T10:00:00Z",
        "venue": "HQ",
        "compulsoryBriefing": True,
    }
    payload.update(overrides)
    return payload


def login(client, username: str, password: str):
    return client.post("/api/auth/login", json={"username": username, "password": password})


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app()


@pytest.fixture
def sql_app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(
        {
            "STORAGE_BACKEND": "database",
            "SESSION_BACKEND": "database",
            "DATABASE_URL": "sqlite://",
            "AUTO_INIT_DB": True,
        }
    )


@pytest.fixture
def container(app):
    return app.extensions["tender_tracker"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_user(container):
    return container.user_service.create_user({"username": "admin", "password": ADMIN_PASSWORD, "isAdmin": True})


@pytest.fixture
def staff_user(container):
    return container.user_service.create_user({"username": "staff", "password": STAFF_PASSWORD})


@pytest.fixture
def admin_client(app, admin_user):
    c = app.test_client()
    assert login(c, "admin", ADMIN_PASSWORD).status_code == 200
    return c


@pytest.fixture
def staff_client(app, staff_user):
    c = app.test_client()
    assert login(c, "staff", STAFF_PASSWORD).status_code == 200
    return c


@pytest.fixture
def make_tender():
    return tender_payload


@pytest.fixture
def login_as():
    return login
