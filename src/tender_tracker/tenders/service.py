from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.exceptions import NotFoundError
from .calendar import month_calendar
from .export import export_tenders
from .model import Tender
from .repository import TenderRepository
from .schemas import TenderCreate, TenderUpdate
from .summary import tender_summary


class TenderService:
    def __init__(self, tenders: TenderRepository):
        self._tenders = tenders

    def list_tenders(self) -> Sequence[Tender]:
        return self._tenders.list_all()

    def get_tender(self, tender_id: str) -> Tender:
        tender = self._tenders.get(tender_id)
        if not tender:
            raise NotFoundError("Tender not found")
        return tender

    def create_tender(self, payload: Any) -> Tender:
        data = TenderCreate.parse(payload)
        return self._tenders.create(data.model_dump())

    def update_tender(self, tender_id: str, payload: Any) -> Tender:
        fields = TenderUpdate.parse(payload).present_fields()
        return self._tenders.update(tender_id, fields)

    def delete_tender(self, tender_id: str) -> None:
        self._tenders.delete(tender_id)

    def calendar_month(self, *, year: int, month: int, today: Optional[date] = None) -> list[dict]:
        today = today or now_utc().date()
        return month_calendar(self._tenders.list_all(), year=year, month=month, today=today)

    def summary(self, *, now: Optional[datetime] = None) -> dict[str, Any]:
        return tender_summary(self._tenders.list_all(), now or now_utc())

    def export_xlsx(self) -> bytes:
        return export_tenders(self._tenders.list_all())
