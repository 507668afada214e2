"""Scraped items restricted to a fixed set of fields."""

from __future__ import annotations

import threading
from typing import Any, Iterable


class StrictItem:
    """A thread-safe record that only accepts predeclared field names."""

    def __init__(self, allowed_fields: Iterable[str]) -> None:
        self._lock = threading.RLock()
        self._allowed = frozenset(allowed_fields)
        self._data: dict[str, Any] = {}

    @property
    def allowed(self) -> frozenset[str]:
        return self._allowed

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``; raise KeyError for an undeclared field."""
        if key not in self._allowed:
            raise KeyError(f"字段 '{key}' 不在预定义字段中")
        with self._lock:
            self._data[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def all(self) -> dict[str, Any]:
        """Return a copy of every field that has been set."""
        with self._lock:
            return dict(self._data)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __getitem__(self, key: str) -> Any:
        with self._lock:
            return self._data[key]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __repr__(self) -> str:
        return f"StrictItem({self.all()!r})"