"""Calendar view helpers: which tenders touch a day, and how urgent that day is."""
from __future__ import annotations

import calendar
from datetime import date
from typing import Iterable, Sequence

from ..common.datetime_utils import utc_day
from ..core.constants import UPCOMING_WITHIN_DAYS, URGENT_WITHIN_DAYS, WARNING_WITHIN_DAYS
from ..core.enums import DayStatus
from .model import Tender


def tenders_for_day(tenders: Iterable[Tender], day: date) -> list[Tender]:
    return [t for t in tenders if utc_day(t.briefing_date) == day or utc_day(t.submission_date) == day]


def day_status(tenders: Iterable[Tender], day: date, today: date) -> DayStatus:
    on_day = tenders_for_day(tenders, day)
    if not on_day:
        return DayStatus.DEFAULT

    if any(utc_day(t.submission_date) == day for t in on_day):
        days_left = (day - today).days
        if days_left < 0:
            return DayStatus.OVERDUE
        if days_left <= URGENT_WITHIN_DAYS:
            return DayStatus.URGENT
        if days_left <= WARNING_WITHIN_DAYS:
            return DayStatus.WARNING
        if days_left <= UPCOMING_WITHIN_DAYS:
            return DayStatus.UPCOMING

    # Briefings only, or a submission more than a week out.
    return DayStatus.BRIEFING


def month_calendar(tenders: Sequence[Tender], *, year: int, month: int, today: date) -> list[dict]:
    _, days_in_month = calendar.monthrange(year, month)
    out: list[dict] = []
    for day_no in range(1, days_in_month + 1):
        day = date(year, month, day_no)
        on_day = tenders_for_day(tenders, day)
        out.append(
            {
                "date": day.isoformat(),
                "status": day_status(on_day, day, today).value,
                "tenderIds": [t.id for t in on_day],
            }
        )
    return out
