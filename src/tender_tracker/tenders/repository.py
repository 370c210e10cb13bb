from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Tender


class TenderRepository(Protocol):
    def get(self, tender_id: str) -> Optional[Tender]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Tender]:
        """All tenders, earliest submission date first."""

        raise NotImplementedError

    def create(self, fields: dict[str, Any]) -> Tender:
        """Insert a tender; raises ConflictError when the tender number is taken."""

        raise NotImplementedError

    def update(self, tender_id: str, fields: dict[str, Any]) -> Tender:
        raise NotImplementedError

    def delete(self, tender_id: str) -> None:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
