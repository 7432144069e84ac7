"""Token-bucket throttle for fullnode view calls. Backoff on 429."""

from __future__ import annotations

import time
from threading import Lock


class TokenBucket:
    """Refill `rate` tokens per second up to `capacity`. Safe to share across threads."""

    def __init__(self, rate: float = 5.0, capacity: int | None = None, clock=time.monotonic) -> None:
        if rate <= 0:
            raise ValueError(f"rate must be positive, got {rate}")
        self.rate = rate
        self.capacity = capacity or max(1, int(rate * 2))
        self.tokens = float(self.capacity)
        self._clock = clock
        self.last = clock()
        self._lock = Lock()

    def consume(self, n: int = 1) -> bool:
        """Take n tokens if available."""
        with self._lock:
            now = self._clock()
            self.tokens = min(self.capacity, self.tokens + (now - self.last) * self.rate)
            self.last = now
            if self.tokens >= n:
                self.tokens -= n
                return True
            return False

    def wait_for_token(self, n: int = 1, sleep=time.sleep) -> None:
        """Block until n tokens available."""
        while not self.consume(n):
            sleep(1.0 / self.rate)


def backoff_delay(attempt: int, base_delay: float = 0.5, max_delay: float = 30.0) -> float:
    """Exponential delay before retry number `attempt` (0-based), capped."""
    return min(max_delay, base_delay * (2**attempt))
