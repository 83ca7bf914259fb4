"""Per-client request rate limiting for the ``/api`` prefix.

Keeps a short timestamp history per client address and rejects requests once
more than ``max_requests`` fall inside the window. History lives in process
memory, so limits are per worker.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable, Deque, Dict

from flask import jsonify, request

from .logging_utils import get_logger

log = get_logger("asa_service.rate_limit")

EXEMPT_PATHS = ("/api/health",)


def _expire(hist: Deque[float], cutoff: float) -> None:
    while hist and hist[0] <= cutoff:
        hist.popleft()


class RateLimiter:
    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._history: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def hit(self, client: str) -> bool:
        """Record a request; False when the client is over the limit."""
        now = self.clock()
        cutoff = now - self.window_seconds
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now
            hist = self._history.setdefault(client, deque())
            _expire(hist, cutoff)
            if len(hist) >= self.max_requests:
                return False
            hist.append(now)
            return True

    def _sweep(self, cutoff: float) -> None:
        """Forget clients with no requests left inside the window."""
        for client in list(self._history):
            hist = self._history[client]
            _expire(hist, cutoff)
            if not hist:
                del self._history[client]

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._history)

    def init_app(self, app) -> None:
        @app.before_request
        def _limit():
            path = request.path
            if not path.startswith("/api/") or path in EXEMPT_PATHS:
                return None
            client = request.remote_addr or "unknown"
            if self.hit(client):
                return None
            log.warn(event="rate_limited", client=client, path=path)
            resp = jsonify(success=False, error="Too many requests from this IP, please try again later.")
            resp.status_code = 429
            resp.headers["Retry-After"] = str(int(self.window_seconds))
            return resp
