"""Dashboard figures for the tender list page."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Iterable

from ..common.datetime_utils import as_utc
from ..core.constants import SUMMARY_UPCOMING_LIMIT, SUMMARY_URGENT_DAYS
from .model import Tender


def upcoming_tenders(tenders: Iterable[Tender], now: datetime, limit: int = SUMMARY_UPCOMING_LIMIT) -> list[Tender]:
    """Next deadlines: submission at or after ``now``, soonest first."""
    now = as_utc(now)
    pending = [t for t in tenders if as_utc(t.submission_date) >= now]
    return sorted(pending, key=lambda t: as_utc(t.submission_date))[:limit]


def urgent_tenders(tenders: Iterable[Tender], now: datetime) -> list[Tender]:
    now = as_utc(now)
    cutoff = now + timedelta(days=SUMMARY_URGENT_DAYS)
    return [t for t in tenders if now <= as_utc(t.submission_date) <= cutoff]


def tender_summary(tenders: Iterable[Tender], now: datetime) -> dict[str, Any]:
    tenders = list(tenders)
    return {
        "total": len(tenders),
        "urgent": len(urgent_tenders(tenders, now)),
        "compulsoryBriefings": sum(1 for t in tenders if t.compulsory_briefing),
        "upcoming": upcoming_tenders(tenders, now),
    }
