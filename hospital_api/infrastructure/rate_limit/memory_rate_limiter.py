import time
from collections import deque
from typing import Callable, Deque, Dict

from ...application.ports.rate_limiter import RateLimiter


class InMemoryRateLimiter(RateLimiter):
    """Sliding-window limiter keyed per client; state lives in this process only."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._store: Dict[str, Deque[float]] = {}

    def _prune(self, key: str, window_seconds: int) -> Deque[float]:
        times = self._store.get(key)
        if times is None:
            return deque()
        window_start = self._clock() - window_seconds
        while times and times[0] <= window_start:
            times.popleft()
        if not times:
            # idle clients leave no state behind
            del self._store[key]
        return times

    def allow(self, key: str, max_requests: int, window_seconds: int) -> bool:
        times = self._prune(key, window_seconds)
        if len(times) >= max_requests:
            return False
        times.append(self._clock())
        self._store[key] = times
        return True

    def retry_after(self, key: str, window_seconds: int) -> int:
        times = self._prune(key, window_seconds)
        if not times:
            return 0
        return max(1, int(times[0] + window_seconds - self._clock()) + 1)
