from __future__ import annotations

import uuid
from typing import Any, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from ..common.datetime_utils import as_utc, to_naive_utc
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import db, session_scope
from ..database.models import TenderRow
from .model import Tender
from .repository import TenderRepository

_DATE_COLUMNS = {"briefing_date", "submission_date"}


def _to_tender(row: TenderRow) -> Tender:
    return Tender(
        id=row.id,
        tender_number=row.tender_number,
        client_name=row.client_name,
        description=row.description,
        briefing_date=as_utc(row.briefing_date),
        submission_date=as_utc(row.submission_date),
        venue=row.venue,
        compulsory_briefing=bool(row.compulsory_briefing),
    )


def _column_values(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: to_naive_utc(v) if k in _DATE_COLUMNS else v for k, v in fields.items()}


class SqlTenderRepository(TenderRepository):
    def get(self, tender_id: str) -> Optional[Tender]:
        row = db.session.get(TenderRow, tender_id)
        return _to_tender(row) if row else None

    def list_all(self) -> Sequence[Tender]:
        rows = db.session.execute(select(TenderRow).order_by(TenderRow.submission_date)).scalars().all()
        return [_to_tender(r) for r in rows]

    def create(self, fields: dict[str, Any]) -> Tender:
        row = TenderRow(id=str(uuid.uuid4()), **_column_values(fields))
        try:
            with session_scope() as s:
                s.add(row)
                s.flush()
                return _to_tender(row)
        except IntegrityError as e:
            raise ConflictError("Tender number already exists") from e

    def update(self, tender_id: str, fields: dict[str, Any]) -> Tender:
        try:
            with session_scope() as s:
                row = s.get(TenderRow, tender_id)
                if row is None:
                    raise NotFoundError(f"Tender with id {tender_id} not found")
                for key, value in _column_values(fields).items():
                    setattr(row, key, value)
                s.flush()
                return _to_tender(row)
        except IntegrityError as e:
            raise ConflictError("Tender number already exists") from e

    def delete(self, tender_id: str) -> None:
        with session_scope() as s:
            s.execute(delete(TenderRow).where(TenderRow.id == tender_id))

    def count(self) -> int:
        return int(db.session.execute(select(func.count()).select_from(TenderRow)).scalar_one())
