from __future__ import annotations

from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository
from .schemas import LoginRequest, UserCreate, UserUpdate


class AuthService:
    """Use case: authenticate user (login) and resolve the session user."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, payload: Any) -> User:
        data = LoginRequest.parse(payload)

        user = self._users.get_by_username(data.username)
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, data.password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")
        return user

    def current_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def get_user(self, user_id: str) -> User:
        user = self._users.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_user(self, payload: Any) -> User:
        data = UserCreate.parse(payload)

        if self._users.get_by_username(data.username):
            raise ConflictError("Username already exists")

        return self._users.create(
            username=data.username,
            password_hash=generate_password_hash(data.password),
            is_admin=data.is_admin,
        )

    def update_user(self, user_id: str, payload: Any) -> User:
        fields = UserUpdate.parse(payload).present_fields()

        # Only re-hash when a new password was supplied.
        password = fields.pop("password", None)
        if password is not None:
            fields["password_hash"] = generate_password_hash(password)

        return self._users.update(user_id, fields)

    def delete_user(self, *, actor_id: str, user_id: str) -> None:
        if actor_id == user_id:
            raise ValidationError("Cannot delete your own account")
        self._users.delete(user_id)
