"""
core/metrics.py -- Visit counter for the static app pages.

One HitCounter lives on app.state for the lifetime of the server; the
request middleware increments it and the admin routes read and reset it.
It is passed around explicitly rather than kept as a module global, so each
TestClient app gets a fresh count.
"""

import threading


class HitCounter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits = 0

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0
