"""HTTP client for the Tender Tracker API.

Reads are cached per resource path; a successful mutation invalidates the
paths it affects so the next read goes back to the server. A failed request
raises :class:`ApiError` and leaves the cache untouched.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

import requests

from ..common.datetime_utils import parse_iso, to_iso
from ..tenders.schemas import check_date_order
from ..users.schemas import check_user_form
from .cache import QueryCache

TENDERS = "/tenders"
USERS = "/admin/users"
ME = "/auth/me"


class ApiError(Exception):
    def __init__(self, status: int, message: str, errors: Optional[list] = None):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
        self.errors = errors


def _encode(payload: dict[str, Any]) -> dict[str, Any]:
    return {k: to_iso(v) if isinstance(v, datetime) else v for k, v in payload.items()}


def _as_datetime(value: Any) -> datetime:
    return value if isinstance(value, datetime) else parse_iso(str(value))


class TenderTrackerClient:
    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        *,
        http: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        self._base_url = base_url.rstrip("/")
        # The session keeps the login cookie between calls
        self._http = http or requests.Session()
        self._timeout = timeout
        self.cache = QueryCache()

    def _request(self, method: str, path: str, payload: Optional[dict[str, Any]] = None) -> Any:
        resp = self._http.request(
            method,
            f"{self._base_url}{path}",
            json=_encode(payload) if payload is not None else None,
            timeout=self._timeout,
        )
        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            errors = body.get("errors") if isinstance(body, dict) else None
            raise ApiError(resp.status_code, message or f"Request failed ({resp.status_code})", errors)
        return body

    def _query(self, path: str) -> Any:
        if path in self.cache:
            return self.cache.get(path)
        data = self._request("GET", path)
        self.cache.set(path, data)
        return data

    # auth

    def login(self, username: str, password: str) -> dict:
        user = self._request("POST", "/auth/login", {"username": username, "password": password})
        self.cache.clear()
        self.cache.set(ME, user)
        return user

    def logout(self) -> None:
        self._request("POST", "/auth/logout")
        self.cache.clear()
        self.cache.set(ME, None)

    def me(self) -> Optional[dict]:
        try:
            return self._query(ME)
        except ApiError as e:
            if e.status == 401:
                self.cache.set(ME, None)
                return None
            raise

    # tenders

    def list_tenders(self) -> list[dict]:
        return self._query(TENDERS)

    def get_tender(self, tender_id: str) -> dict:
        return self._query(f"{TENDERS}/{tender_id}")

    def create_tender(self, payload: dict[str, Any]) -> dict:
        check_date_order(_as_datetime(payload["briefingDate"]), _as_datetime(payload["submissionDate"]))
        tender = self._request("POST", TENDERS, payload)
        self.cache.invalidate(TENDERS)
        return tender

    def update_tender(self, tender_id: str, payload: dict[str, Any]) -> dict:
        if "briefingDate" in payload and "submissionDate" in payload:
            check_date_order(_as_datetime(payload["briefingDate"]), _as_datetime(payload["submissionDate"]))
        tender = self._request("PUT", f"{TENDERS}/{tender_id}", payload)
        self.cache.invalidate(TENDERS)
        return tender

    def delete_tender(self, tender_id: str) -> None:
        self._request("DELETE", f"{TENDERS}/{tender_id}")
        self.cache.invalidate(TENDERS)

    # users (admin)

    def list_users(self) -> list[dict]:
        return self._query(USERS)

    def create_user(self, username: str, password: str, confirm_password: str, *, is_admin: bool = False) -> dict:
        check_user_form(username, password, confirm_password)
        user = self._request("POST", USERS, {"username": username, "password": password, "isAdmin": is_admin})
        self.cache.invalidate(USERS)
        return user

    def update_user(self, user_id: str, payload: dict[str, Any], *, confirm_password: Optional[str] = None) -> dict:
        payload = dict(payload)
        # An empty password field keeps the current password.
        if not payload.get("password"):
            payload.pop("password", None)
        check_user_form(payload.get("username"), payload.get("password"), confirm_password)
        user = self._request("PUT", f"{USERS}/{user_id}", payload)
        self.cache.invalidate(USERS)
        self.cache.invalidate(ME)
        return user

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"{USERS}/{user_id}")
        self.cache.invalidate(USERS)
