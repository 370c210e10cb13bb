from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import Session

db = SQLAlchemy()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Unit of work on the request-scoped session.

    Commits when the block finishes, rolls back and re-raises otherwise.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
