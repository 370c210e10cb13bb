from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import to_iso


@dataclass(frozen=True)
class Tender:
    """Domain entity: a procurement opportunity being tracked.

    Dates are aware UTC datetimes.
    """

    id: str
    tender_number: str
    client_name: str
    description: str
    briefing_date: datetime
    submission_date: datetime
    venue: str
    compulsory_briefing: bool = False


def to_json(tender: Tender) -> dict:
    return {
        "id": tender.id,
        "tenderNumber": tender.tender_number,
        "clientName": tender.client_name,
        "description": tender.description,
        "briefingDate": to_iso(tender.briefing_date),
        "submissionDate": to_iso(tender.submission_date),
        "venue": tender.venue,
        "compulsoryBriefing": tender.compulsory_briefing,
    }
