"""Fetching request bodies, with tracking of requests in flight."""

from __future__ import annotations

import threading
import time
import urllib.error
import urllib.request

from .request import Request


class Downloader:
    """Downloads requests and records which ones are currently active.

    With ``simulate`` set (the default), :meth:`fetch` does not touch the
    network: it waits ``delay`` seconds and returns a fixed body.
    """

    def __init__(self, delay: float = 1.0, simulate: bool = True) -> None:
        self.delay = delay
        self.simulate = simulate
        self._lock = threading.Lock()
        self._active: set[str] = set()

    def fetch(self, request: Request) -> str:
        """Download ``request`` while marking it active."""
        with self._lock:
            self._active.add(request.uuid)
        try:
            if self.simulate:
                return self.download_test(request)
            return self.download(request)
        finally:
            with self._lock:
                self._active.discard(request.uuid)

    def download(self, request: Request) -> str:
        """GET the request's URL, print the status code and return the body."""
        try:
            with urllib.request.urlopen(request.url) as reply:
                status = reply.status
                data = reply.read()
        except urllib.error.HTTPError as error:
            status = error.code
            data = error.read()
            error.close()
        print(status)
        return data.decode("utf-8", errors="replace")

    def download_test(self, request: Request) -> str:
        """Pretend to download: wait, report the URL and return ``"response"``."""
        time.sleep(self.delay)
        print("Download Test Is => " + request.url)
        return "response"

    def idle(self) -> bool:
        """Return whether no request is being downloaded."""
        with self._lock:
            return not self._active