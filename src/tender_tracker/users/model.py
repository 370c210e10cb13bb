from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Domain entity: an account that can sign in.

    Plain data object; no database access here.
    """

    id: str
    username: str
    password_hash: str
    is_admin: bool = False


def sanitize(user: User) -> dict:
    """Public JSON view of a user (never includes the password hash)."""
    return {"id": user.id, "username": user.username, "isAdmin": user.is_admin}
