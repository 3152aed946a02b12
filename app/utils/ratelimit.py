# app/utils/ratelimit.py
from __future__ import annotations

import math
import threading
import time

from fastapi import HTTPException, Request


class RateLimiter:
    """
    Fixed-window counter per client address, kept in process memory.
    Use an instance as a FastAPI dependency.
    """

    def __init__(self, limit: int, window_seconds: int, message: str = "Too many requests, please try again later."):
        self.limit = limit
        self.window = window_seconds
        self.message = message
        self._hits: dict[str, tuple[float, int]] = {}
        self._lock = threading.Lock()
        self._swept_at = float("-inf")

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()

    def _sweep(self, now: float) -> None:
        # at most once per window; caller holds the lock
        if now - self._swept_at < self.window:
            return
        self._swept_at = now
        self._hits = {k: v for k, v in self._hits.items() if now - v[0] < self.window}

    def hit(self, key: str, now: float | None = None) -> float:
        """Count one request; return seconds to wait, or 0 when allowed."""
        now = time.monotonic() if now is None else now
        with self._lock:
            self._sweep(now)
            start, count = self._hits.get(key, (now, 0))
            if now - start >= self.window:
                start, count = now, 0
            count += 1
            self._hits[key] = (start, count)
            if count > self.limit:
                return self.window - (now - start)
            return 0

    def __call__(self, request: Request) -> None:
        key = request.client.host if request.client else "unknown"
        wait = self.hit(key)
        if wait > 0:
            raise HTTPException(
                status_code=429,
                detail=self.message,
                headers={"Retry-After": str(max(1, math.ceil(wait)))},
            )


reservation_limiter = RateLimiter(limit=5, window_seconds=10 * 60)
