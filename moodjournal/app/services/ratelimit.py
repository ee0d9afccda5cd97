from __future__ import annotations

import math
import time
from collections import defaultdict, deque
from collections.abc import Callable


class RateLimiter:
    """Sliding-window limiter for write routes, one bucket per route key.

    Buckets live in process memory, so each worker enforces its own limit.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.monotonic
        self._hits: dict[str, deque[float]] = defaultdict(deque)

    def _prune(self, key: str, window_seconds: float, now: float) -> deque[float]:
        hits = self._hits[key]
        while hits and now - hits[0] > window_seconds:
            hits.popleft()
        return hits

    def allow(self, key: str, limit: int, window_seconds: float) -> bool:
        now = self._clock()
        hits = self._prune(key, window_seconds, now)
        if len(hits) >= limit:
            return False
        hits.append(now)
        return True

    def retry_after(self, key: str, window_seconds: float) -> int:
        """Whole seconds until the oldest hit in ``key`` leaves the window."""

        now = self._clock()
        hits = self._prune(key, window_seconds, now)
        if not hits:
            return 0
        return max(math.ceil(window_seconds - (now - hits[0])), 1)

    def reset(self, key: str | None = None) -> None:
        if key is None:
            self._hits.clear()
        else:
            self._hits.pop(key, None)


__all__ = ["RateLimiter"]
