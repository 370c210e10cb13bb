from __future__ import annotations

from enum import Enum


class StorageBackend(str, Enum):
    """Where users and tenders are persisted."""

    DATABASE = "database"
    MEMORY = "memory"


class DayStatus(str, Enum):
    """Calendar tag for a day, derived from the days left until submission."""

    OVERDUE = "overdue"
    URGENT = "urgent"
    WARNING = "warning"
    UPCOMING = "upcoming"
    BRIEFING = "briefing"
    DEFAULT = "default"
