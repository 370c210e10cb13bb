from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: the service layer depends on this interface, not on a concrete store.
    """

    def get(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create(self, *, username: str, password_hash: str, is_admin: bool = False) -> User:
        """Insert a user; raises ConflictError when the username is taken."""

        raise NotImplementedError

    def update(self, user_id: str, fields: dict[str, Any]) -> User:
        """Merge ``fields`` (username, password_hash, is_admin) into the row.

        Raises NotFoundError for an unknown id.
        """

        raise NotImplementedError

    def delete(self, user_id: str) -> None:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
