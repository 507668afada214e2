"""Crawl requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional
from uuid import uuid4

Callback = Callable[[str], Optional[Iterable[Any]]]


def _new_id() -> str:
    return str(uuid4())


@dataclass(eq=False)
class Request:
    """A URL to fetch, the callback that parses it, and per-request data."""

    url: str
    callback: Optional[Callback] = None
    meta: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    method: str = "GET"
    cookies: dict[str, str] = field(default_factory=dict)
    proxy: dict[str, str] = field(default_factory=dict)
    priority: int = 0
    uuid: str = field(default_factory=_new_id)