from __future__ import annotations

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_naive_utc(value: datetime) -> datetime:
    """What we store in DATETIME columns."""
    return as_utc(value).replace(tzinfo=None)


def to_iso(value: datetime) -> str:
    return as_utc(value).isoformat().replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp (trailing 'Z' allowed) into aware UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(value))


def utc_day(value: datetime) -> date:
    return as_utc(value).date()


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM string into (year, month)."""
    parsed = datetime.strptime(value, "%Y-%m")
    return parsed.year, parsed.month
