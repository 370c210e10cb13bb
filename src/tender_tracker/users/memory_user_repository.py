from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from typing import Any, Optional, Sequence

from ..core.exceptions import ConflictError, NotFoundError
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """Process-local store for tests and quick local runs."""

    def __init__(self):
        self._by_id: dict[str, User] = {}
        self._lock = threading.Lock()

    def _username_taken(self, username: str, *, exclude_id: Optional[str] = None) -> bool:
        return any(u.username == username and u.id != exclude_id for u in self._by_id.values())

    def get(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        for user in self._by_id.values():
            if user.username == username:
                return user
        return None

    def list_all(self) -> Sequence[User]:
        return list(self._by_id.values())

    def create(self, *, username: str, password_hash: str, is_admin: bool = False) -> User:
        with self._lock:
            if self._username_taken(username):
                raise ConflictError("Username already exists")
            user = User(id=str(uuid.uuid4()), username=username, password_hash=password_hash, is_admin=bool(is_admin))
            self._by_id[user.id] = user
            return user

    def update(self, user_id: str, fields: dict[str, Any]) -> User:
        with self._lock:
            user = self._by_id.get(user_id)
            if user is None:
                raise NotFoundError(f"User with id {user_id} not found")
            if "username" in fields and self._username_taken(fields["username"], exclude_id=user_id):
                raise ConflictError("Username already exists")
            updated = replace(user, **fields)
            self._by_id[user_id] = updated
            return updated

    def delete(self, user_id: str) -> None:
        with self._lock:
            self._by_id.pop(user_id, None)

    def count(self) -> int:
        return len(self._by_id)
