from __future__ import annotations

import uuid
from typing import Any, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import db, session_scope
from ..database.models import UserRow
from .model import User
from .repository import UserRepository

# Domain field -> column attribute
_COLUMNS = {"username": "username", "password_hash": "password", "is_admin": "is_admin"}


def _to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        username=row.username,
        password_hash=row.password,
        is_admin=bool(row.is_admin),
    )


class SqlUserRepository(UserRepository):
    def get(self, user_id: str) -> Optional[User]:
        row = db.session.get(UserRow, user_id)
        return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        row = db.session.execute(
            select(UserRow).where(UserRow.username == username).limit(1)
        ).scalar_one_or_none()
        return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        rows = db.session.execute(select(UserRow)).scalars().all()
        return [_to_user(r) for r in rows]

    def create(self, *, username: str, password_hash: str, is_admin: bool = False) -> User:
        row = UserRow(id=str(uuid.uuid4()), username=username, password=password_hash, is_admin=bool(is_admin))
        try:
            with session_scope() as s:
                s.add(row)
                s.flush()
                return _to_user(row)
        except IntegrityError as e:
            raise ConflictError("Username already exists") from e

    def update(self, user_id: str, fields: dict[str, Any]) -> User:
        try:
            with session_scope() as s:
                row = s.get(UserRow, user_id)
                if row is None:
                    raise NotFoundError(f"User with id {user_id} not found")
                for key, value in fields.items():
                    setattr(row, _COLUMNS[key], value)
                s.flush()
                return _to_user(row)
        except IntegrityError as e:
            raise ConflictError("Username already exists") from e

    def delete(self, user_id: str) -> None:
        with session_scope() as s:
            s.execute(delete(UserRow).where(UserRow.id == user_id))

    def count(self) -> int:
        return int(db.session.execute(select(func.count()).select_from(UserRow)).scalar_one())
