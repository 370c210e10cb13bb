from __future__ import annotations

from dataclasses import dataclass

from .auth.sessions import MemorySessionStore, SessionStore, SqlSessionStore
from .core.enums import StorageBackend
from .tenders.memory_tender_repository import InMemoryTenderRepository
from .tenders.repository import TenderRepository
from .tenders.service import TenderService
from .tenders.sql_tender_repository import SqlTenderRepository
from .users.memory_user_repository import InMemoryUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.sql_user_repository import SqlUserRepository


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    tenders_repo: TenderRepository
    session_store: SessionStore

    auth_service: AuthService
    user_service: UserService
    tender_service: TenderService


def build_container(*, storage: StorageBackend, sessions: StorageBackend) -> Container:
    if storage == StorageBackend.DATABASE:
        users_repo: UserRepository = SqlUserRepository()
        tenders_repo: TenderRepository = SqlTenderRepository()
    else:
        users_repo = InMemoryUserRepository()
        tenders_repo = InMemoryTenderRepository()

    session_store: SessionStore = SqlSessionStore() if sessions == StorageBackend.DATABASE else MemorySessionStore()

    return Container(
        users_repo=users_repo,
        tenders_repo=tenders_repo,
        session_store=session_store,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        tender_service=TenderService(tenders_repo),
    )
