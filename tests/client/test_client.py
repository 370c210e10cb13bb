from __future__ import annotations

import json

import pytest

from tender_tracker.client import ApiError, QueryCache, TenderTrackerClient
from tender_tracker.core.exceptions import ValidationError

BASE_URL = "http://testserver/api"


class _Response:
    def __init__(self, resp):
        self.status_code = resp.status_code
        self._data = resp.get_data(as_text=True)

    def json(self):
        if not self._data:
            raise ValueError("empty body")
        return json.loads(self._data)


class FlaskHttp:
    """Routes client calls into a Flask test client and counts them."""

    def __init__(self, test_client):
        self._client = test_client
        self.calls: list[tuple[str, str]] = []

    def request(self, method, url, json=None, timeout=None):
        path = "/api" + url[len(BASE_URL):]
        self.calls.append((method, path))
        return _Response(self._client.open(path, method=method, json=json))


@pytest.fixture
def http(app):
    return FlaskHttp(app.test_client())


@pytest.fixture
def api(http):
    return TenderTrackerClient(BASE_URL, http=http)


@pytest.fixture
def staff_api(api, staff_user):
    api.login("staff", "staff-pass")
    return api


def test_query_cache_invalidates_prefix():
    cache = QueryCache()
    cache.set("/tenders", [1])
    cache.set("/tenders/abc", {"id": "abc"})
    cache.set("/tendersx", "other")
    cache.set("/admin/users", [])

    cache.invalidate("/tenders")

    assert sorted(cache.keys()) == ["/admin/users", "/tendersx"]


def test_me_is_none_when_logged_out(api):
    assert api.me() is None


def test_login_primes_me(staff_api, http):
    calls_before = len(http.calls)

    me = staff_api.me()

    assert me["username"] == "staff"
    assert len(http.calls) == calls_before


def test_reads_are_cached(staff_api, http, make_tender):
    staff_api.create_tender(make_tender())
    staff_api.list_tenders()
    calls_before = len(http.calls)

    staff_api.list_tenders()

    assert len(http.calls) == calls_before


def test_mutation_invalidates_tender_queries(staff_api, make_tender):
    assert staff_api.list_tenders() == []

    created = staff_api.create_tender(make_tender())
    assert "/tenders" not in staff_api.cache
    assert [t["id"] for t in staff_api.list_tenders()] == [created["id"]]

    staff_api.get_tender(created["id"])
    staff_api.update_tender(created["id"], {"venue": "Annex"})
    assert f"/tenders/{created['id']}" not in staff_api.cache
    assert staff_api.get_tender(created["id"])["venue"] == "Annex"

    staff_api.delete_tender(created["id"])
    assert staff_api.list_tenders() == []


def test_failed_mutation_leaves_cache(staff_api, make_tender):
    staff_api.create_tender(make_tender())
    cached = staff_api.list_tenders()

    with pytest.raises(ApiError) as exc:
        staff_api.create_tender(make_tender())

    assert exc.value.status == 400
    assert exc.value.message == "Tender number already exists"
    assert staff_api.cache.get("/tenders") == cached


def test_date_order_checked_before_request(staff_api, http, make_tender):
    calls_before = len(http.calls)

    with pytest.raises(ValidationError) as exc:
        staff_api.create_tender(make_tender(submissionDate="2025-02-01T00:00:00Z"))

    assert exc.value.errors[0]["field"] == "submissionDate"
    assert len(http.calls) == calls_before


def test_validation_errors_surface(staff_api, make_tender):
    payload = make_tender()
    del payload["venue"]

    with pytest.raises(ApiError) as exc:
        staff_api.create_tender(payload)

    assert exc.value.status == 400
    assert exc.value.errors == [{"field": "venue", "message": "Field required"}]


def test_admin_user_management(api, admin_user):
    api.login("admin", "admin-pass")
    assert [u["username"] for u in api.list_users()] == ["admin"]

    created = api.create_user("dave", "pw-12345678", "pw-12345678", is_admin=False)
    assert sorted(u["username"] for u in api.list_users()) == ["admin", "dave"]

    api.update_user(created["id"], {"isAdmin": True})
    assert {u["username"]: u["isAdmin"] for u in api.list_users()}["dave"] is True

    api.delete_user(created["id"])
    assert [u["username"] for u in api.list_users()] == ["admin"]


def test_staff_cannot_list_users(staff_api):
    with pytest.raises(ApiError) as exc:
        staff_api.list_users()

    assert exc.value.status == 403


def test_logout_clears_cache(staff_api):
    staff_api.list_tenders()

    staff_api.logout()

    assert "/tenders" not in staff_api.cache
    assert staff_api.me() is None


def test_create_user_form_rules_checked_before_request(api, admin_user, http):
    api.login("admin", "admin-pass")
    calls_before = len(http.calls)

    with pytest.raises(ValidationError) as exc:
        api.create_user("ab", "1", "1")

    fields = [e["field"] for e in exc.value.errors]
    assert fields == ["username", "password"]
    assert len(http.calls) == calls_before


def test_create_user_requires_matching_confirmation(api, admin_user, http):
    api.login("admin", "admin-pass")
    calls_before = len(http.calls)

    with pytest.raises(ValidationError) as exc:
        api.create_user("carol", "long-enough", "long-enougH")

    assert exc.value.errors == [{"field": "confirmPassword", "message": "Passwords do not match"}]
    assert len(http.calls) == calls_before


def test_update_user_checks_password_only_when_given(api, admin_user, staff_user, http):
    api.login("admin", "admin-pass")

    api.update_user(staff_user.id, {"isAdmin": True, "password": ""})

    calls_before = len(http.calls)
    with pytest.raises(ValidationError):
        api.update_user(staff_user.id, {"password": "short"}, confirm_password="short")
    assert len(http.calls) == calls_before

    api.update_user(staff_user.id, {"password": "new-password"}, confirm_password="new-password")
    api.logout()
    assert api.login("staff", "new-password")["isAdmin"] is True
