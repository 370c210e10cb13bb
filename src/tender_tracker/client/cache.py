from __future__ import annotations

from typing import Any


class QueryCache:
    """Results of GET requests keyed by resource path.

    Invalidating ``/tenders`` drops ``/tenders`` and everything below it
    (``/tenders/<id>``, ``/tenders/calendar``...).
    """

    def __init__(self):
        self._entries: dict[str, Any] = {}

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def get(self, path: str, default: Any = None) -> Any:
        return self._entries.get(path, default)

    def set(self, path: str, value: Any) -> None:
        self._entries[path] = value

    def invalidate(self, prefix: str) -> None:
        for key in list(self._entries):
            if key == prefix or key.startswith(prefix.rstrip("/") + "/"):
                del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        return list(self._entries)
