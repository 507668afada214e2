"""First-in, first-out queue of pending requests."""

from __future__ import annotations

import threading
from collections import deque
from typing import Optional

from .request import Request


class Scheduler:
    """Thread-safe FIFO of requests waiting to be downloaded."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queue: deque[Request] = deque()

    def next_request(self) -> Optional[Request]:
        """Remove and return the oldest request, or ``None`` when empty."""
        with self._lock:
            return self._queue.popleft() if self._queue else None

    def en_request(self, request: Request) -> None:
        with self._lock:
            self._queue.append(request)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._queue

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)