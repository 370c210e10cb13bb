from __future__ import annotations

from typing import Optional

from sqlalchemy import inspect

from ..core.logging import get_logger
from ..users.repository import UserRepository
from ..users.service import UserService
from .connection import db

logger = get_logger("database")


def init_schema() -> None:
    """Create missing tables (idempotent: existing tables are left alone).

    Must run inside an application context.
    """
    from . import models  # noqa: F401  (register tables on the metadata)

    db.create_all()


def list_tables() -> list[str]:
    return sorted(inspect(db.engine).get_table_names())


def ensure_admin_user(users: UserRepository, *, username: str, password: Optional[str]) -> bool:
    """Create the first admin account when no user exists yet.

    Returns True when an account was created.
    """
    if users.count() > 0:
        return False
    if not password:
        logger.warning("No users exist and ADMIN_PASSWORD is not set; skipping admin seed")
        return False

    UserService(users).create_user({"username": username, "password": password, "isAdmin": True})
    logger.info("Created initial admin account %r", username)
    return True
