"""Per-client request ceiling over a rolling time window."""

import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable


@dataclass
class RateLimitResult:
    """Outcome of one admission check."""
    allowed: bool
    limit: int
    remaining: int
    reset_after: float  # seconds until the oldest counted request leaves the window

    @property
    def retry_after(self) -> int:
        """Whole seconds a rejected client should wait."""
        return max(1, int(self.reset_after + 0.999))


class RateLimiter:
    """Allow at most ``limit`` requests per ``window`` seconds for each key.

    Keys are client addresses. The window rolls: a request counts for exactly
    ``window`` seconds after it was admitted. Rejected requests are not counted.
    Safe to share between request threads.
    """

    def __init__(self, limit: int = 60, window: float = 60.0, clock: Callable[[], float] = time.monotonic):
        if limit <= 0 or window <= 0:
            raise ValueError("limit and window must be positive")
        self.limit = limit
        self.window = window
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def check(self, key: str) -> RateLimitResult:
        """Record a request for ``key`` if it is under the ceiling."""
        now = self._clock()
        with self._lock:
            self._sweep(now)
            hits = self._hits.setdefault(key, deque())
            self._expire(hits, now)

            if len(hits) >= self.limit:
                reset_after = hits[0] + self.window - now
                return RateLimitResult(False, self.limit, 0, reset_after)

            hits.append(now)
            reset_after = hits[0] + self.window - now
            return RateLimitResult(True, self.limit, self.limit - len(hits), reset_after)

    def _expire(self, hits: deque, now: float) -> None:
        cutoff = now - self.window
        while hits and hits[0] <= cutoff:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        # Drop idle clients once per window so the table stays bounded
        if now - self._last_sweep < self.window:
            return
        self._last_sweep = now
        for key in list(self._hits):
            hits = self._hits[key]
            self._expire(hits, now)
            if not hits:
                del self._hits[key]
