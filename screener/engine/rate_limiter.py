"""Sliding-window rate limiter for outbound model calls."""

import time
from collections.abc import Callable


class RateLimiter:
    """
    Allow at most ``max_requests`` calls in any ``window_seconds`` interval ending now.

    Not synchronized: two callers racing on one instance can both be admitted.
    That is acceptable for a single-process, single-event-loop server.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._timestamps: list[float] = []

    def is_limited(self) -> bool:
        """
        Return True if the window is full. Otherwise record this call and return False.
        A limited call is not recorded.
        """
        now = self._clock()
        self._timestamps = [t for t in self._timestamps if now - t < self.window_seconds]
        if len(self._timestamps) >= self.max_requests:
            return True
        self._timestamps.append(now)
        return False

    def time_to_wait_ms(self) -> float:
        """Milliseconds until the oldest recorded call leaves the window."""
        if not self._timestamps:
            return 0
        elapsed = self._clock() - self._timestamps[0]
        return max(0.0, (self.window_seconds - elapsed) * 1000)
