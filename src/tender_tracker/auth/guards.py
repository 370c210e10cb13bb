from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import jsonify

from ..common.http import internal_error
from ..core.logging import get_logger
from ..users.model import User
from ..users.repository import UserRepository
from .sessions import session_user_id

logger = get_logger("auth")


@dataclass(frozen=True)
class AuthContext:
    """Who is calling: passed explicitly as the first argument of guarded views."""

    user_id: str
    user: Optional[User] = None


class Guards:
    def __init__(self, users: UserRepository):
        self._users = users

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user_id = session_user_id()
            if not user_id:
                return jsonify({"message": "Authentication required"}), 401
            return view(AuthContext(user_id=user_id), *args, **kwargs)

        return wrapper

    def admin_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user_id = session_user_id()
            if not user_id:
                return jsonify({"message": "Authentication required"}), 401

            try:
                user = self._users.get(user_id)
            except Exception:
                logger.exception("Error checking admin status")
                return internal_error()

            if not user or not user.is_admin:
                return jsonify({"message": "Admin access required"}), 403

            return view(AuthContext(user_id=user_id, user=user), *args, **kwargs)

        return wrapper
