from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from ..common.datetime_utils import as_utc
from .model import Tender

EXPORT_COLUMNS = [
    "Tender Number",
    "Client",
    "Description",
    "Venue",
    "Briefing Date",
    "Submission Date",
    "Compulsory Briefing",
]

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _fmt(value) -> str:
    return as_utc(value).strftime("%Y-%m-%d %H:%M")


def export_tenders(tenders: Sequence[Tender]) -> bytes:
    """Spreadsheet (.xlsx) with one row per tender."""
    rows = [
        [
            t.tender_number,
            t.client_name,
            t.description,
            t.venue,
            _fmt(t.briefing_date),
            _fmt(t.submission_date),
            "Yes" if t.compulsory_briefing else "No",
        ]
        for t in tenders
    ]
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Tenders")
    return out.getvalue()
