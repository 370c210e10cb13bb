from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from typing import Any, Optional, Sequence

from ..core.exceptions import ConflictError, NotFoundError
from .model import Tender
from .repository import TenderRepository


class InMemoryTenderRepository(TenderRepository):
    def __init__(self):
        self._by_id: dict[str, Tender] = {}
        self._lock = threading.Lock()

    def _number_taken(self, tender_number: str, *, exclude_id: Optional[str] = None) -> bool:
        return any(t.tender_number == tender_number and t.id != exclude_id for t in self._by_id.values())

    def get(self, tender_id: str) -> Optional[Tender]:
        return self._by_id.get(tender_id)

    def list_all(self) -> Sequence[Tender]:
        return sorted(self._by_id.values(), key=lambda t: t.submission_date)

    def create(self, fields: dict[str, Any]) -> Tender:
        with self._lock:
            if self._number_taken(fields["tender_number"]):
                raise ConflictError("Tender number already exists")
            tender = Tender(id=str(uuid.uuid4()), **fields)
            self._by_id[tender.id] = tender
            return tender

    def update(self, tender_id: str, fields: dict[str, Any]) -> Tender:
        with self._lock:
            tender = self._by_id.get(tender_id)
            if tender is None:
                raise NotFoundError(f"Tender with id {tender_id} not found")
            if "tender_number" in fields and self._number_taken(fields["tender_number"], exclude_id=tender_id):
                raise ConflictError("Tender number already exists")
            updated = replace(tender, **fields)
            self._by_id[tender_id] = updated
            return updated

    def delete(self, tender_id: str) -> None:
        with self._lock:
            self._by_id.pop(tender_id, None)

    def count(self) -> int:
        return len(self._by_id)
