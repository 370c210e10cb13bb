"""Server-side sessions.

The cookie carries only a signed session id; the session data lives in a
pluggable store (process memory for tests, a ``sessions`` table otherwise).
"""
from __future__ import annotations

import json
import secrets
import threading
from datetime import datetime
from typing import Any, Optional, Protocol

from flask import Flask, current_app, session
from flask.sessions import SessionInterface, SessionMixin
from itsdangerous import BadSignature, Signer
from sqlalchemy import delete
from werkzeug.datastructures import CallbackDict

from ..common.datetime_utils import as_utc, now_utc, to_naive_utc
from ..core.constants import SESSION_ID_BYTES
from ..database.connection import session_scope
from ..database.models import SessionRow

SESSION_USER_KEY = "user_id"


class SessionStore(Protocol):
    def load(self, sid: str) -> Optional[dict[str, Any]]:
        """Stored data for ``sid``, or None when absent or expired."""

        raise NotImplementedError

    def save(self, sid: str, data: dict[str, Any], expires_at: datetime) -> None:
        raise NotImplementedError

    def delete(self, sid: str) -> None:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    def __init__(self):
        self._items: dict[str, tuple[dict[str, Any], datetime]] = {}
        self._lock = threading.Lock()

    def load(self, sid: str) -> Optional[dict[str, Any]]:
        with self._lock:
            item = self._items.get(sid)
            if item is None:
                return None
            data, expires_at = item
            if expires_at <= now_utc():
                del self._items[sid]
                return None
            return dict(data)

    def save(self, sid: str, data: dict[str, Any], expires_at: datetime) -> None:
        now = now_utc()
        with self._lock:
            # Prune sessions nobody came back for.
            for stale in [k for k, (_, exp) in self._items.items() if exp <= now]:
                del self._items[stale]
            self._items[sid] = (dict(data), as_utc(expires_at))

    def delete(self, sid: str) -> None:
        with self._lock:
            self._items.pop(sid, None)

    def __len__(self) -> int:
        return len(self._items)


class SqlSessionStore(SessionStore):
    def load(self, sid: str) -> Optional[dict[str, Any]]:
        with session_scope() as s:
            row = s.get(SessionRow, sid)
            if row is None:
                return None
            if as_utc(row.expires_at) <= now_utc():
                s.delete(row)
                return None
            return json.loads(row.data)

    def save(self, sid: str, data: dict[str, Any], expires_at: datetime) -> None:
        with session_scope() as s:
            s.execute(delete(SessionRow).where(SessionRow.expires_at <= to_naive_utc(now_utc())))
            row = s.get(SessionRow, sid)
            if row is None:
                row = SessionRow(sid=sid)
                s.add(row)
            row.data = json.dumps(data)
            row.expires_at = to_naive_utc(expires_at)

    def delete(self, sid: str) -> None:
        with session_scope() as s:
            s.execute(delete(SessionRow).where(SessionRow.sid == sid))


class ServerSideSession(CallbackDict, SessionMixin):
    def __init__(self, initial: Optional[dict[str, Any]] = None, *, sid: str, new: bool = False):
        def on_update(self_):
            self_.modified = True

        super().__init__(initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False


def new_session_id() -> str:
    return secrets.token_urlsafe(SESSION_ID_BYTES)


class ServerSideSessionInterface(SessionInterface):
    salt = "tender-tracker-session"

    def __init__(self, store: SessionStore):
        self.store = store

    def _signer(self, app: Flask) -> Signer:
        return Signer(app.secret_key, salt=self.salt)

    def open_session(self, app: Flask, request) -> ServerSideSession:
        cookie = request.cookies.get(self.get_cookie_name(app))
        if cookie:
            try:
                sid = self._signer(app).unsign(cookie).decode("utf-8")
            except BadSignature:
                sid = None
            if sid:
                data = self.store.load(sid)
                if data is not None:
                    return ServerSideSession(data, sid=sid)
        return ServerSideSession(sid=new_session_id(), new=True)

    def save_session(self, app: Flask, session: ServerSideSession, response) -> None:
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if not session:
            if session.modified:
                self.store.delete(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if not self.should_set_cookie(app, session):
            return

        # Sliding expiry: every authenticated response pushes it forward.
        expires = self.get_expiration_time(app, session)
        self.store.save(session.sid, dict(session), expires or now_utc() + app.permanent_session_lifetime)
        response.set_cookie(
            name,
            self._signer(app).sign(session.sid).decode("utf-8"),
            expires=expires,
            httponly=self.get_cookie_httponly(app),
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
            domain=domain,
            path=path,
        )
        response.vary.add("Cookie")


def session_user_id() -> Optional[str]:
    return session.get(SESSION_USER_KEY)


def start_session(user_id: str) -> None:
    """Bind ``user_id`` to a fresh session id."""
    store = current_app.session_interface.store
    if not session.new:
        store.delete(session.sid)
    session.clear()
    session.sid = new_session_id()
    session[SESSION_USER_KEY] = user_id
    session.permanent = True


def destroy_session() -> None:
    """Remove the session from the store; raises if the store fails."""
    current_app.session_interface.store.delete(session.sid)
    session.clear()
