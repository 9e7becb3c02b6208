"""
Token bucket rate limiting for provider clients.

Each rate-limited client owns its own bucket; buckets are never shared
between providers or between clients built for the same provider.
"""

import threading
import time
from typing import Callable, Optional

from aggregator.core.logging import get_logger

logger = get_logger("ratelimit")


class TokenBucket:
    """
    Thread-safe token bucket using the monotonic clock.

    Tokens refill continuously at ``rate`` per second up to ``burst``. The
    bucket starts full, so the first ``burst`` requests pass immediately.
    """

    def __init__(
        self,
        rate: float,
        burst: int = 1,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        """
        Initialize token bucket.

        Args:
            rate: Tokens added per second, must be positive
            burst: Bucket capacity
            clock: Monotonic time source, for tests
            sleep: Sleep function, for tests
        """
        if rate <= 0:
            raise ValueError(f"rate must be positive, got {rate}")
        if burst < 1:
            raise ValueError(f"burst must be at least 1, got {burst}")

        self.rate = float(rate)
        self.burst = burst
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._lock = threading.Lock()
        self._tokens = float(burst)
        self._updated = self._clock()

    def _refill(self, now: float) -> None:
        elapsed = max(0.0, now - self._updated)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
        self._updated = now

    def _reserve(self) -> float:
        """Take one token, possibly going into debt. Returns seconds to wait."""
        with self._lock:
            self._refill(self._clock())
            self._tokens -= 1.0
            if self._tokens >= 0:
                return 0.0
            return -self._tokens / self.rate

    def acquire(self) -> None:
        """Block until a token is available."""
        delay = self._reserve()
        if delay > 0:
            logger.debug(f"Rate limit reached, waiting {delay:.3f}s")
            self._sleep(delay)


def new_limiter(rate: float) -> TokenBucket:
    """Create a limiter admitting ``rate`` requests per second, no bursting."""
    return TokenBucket(rate, burst=1)
