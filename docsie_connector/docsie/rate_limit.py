"""
Request rate limiter shared by all Docsie API calls.
"""

import threading
import time
from typing import Callable, TypeVar

T = TypeVar("T")


class RateLimiter:
    """
    Caps in-flight requests and enforces a minimum gap between dispatches.

    Safe to share between threads: every caller goes through the same
    semaphore and the same dispatch-slot bookkeeping.
    """

    def __init__(self, max_concurrent: int = 5, min_time: float = 0.2,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            max_concurrent: Maximum number of requests in flight at once
            min_time: Minimum seconds between two dispatches
            clock: Monotonic clock, injectable for tests
            sleep: Sleep function, injectable for tests
        """
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be at least 1, got {max_concurrent}")
        if min_time < 0:
            raise ValueError(f"min_time must not be negative, got {min_time}")

        self.max_concurrent = max_concurrent
        self.min_time = min_time
        self._clock = clock
        self._sleep = sleep
        self._slots = threading.BoundedSemaphore(max_concurrent)
        self._lock = threading.Lock()
        self._next_dispatch = 0.0

    def _reserve_dispatch_time(self) -> float:
        """Claim the next dispatch slot and return how long to wait for it."""
        with self._lock:
            now = self._clock()
            dispatch_at = max(now, self._next_dispatch)
            self._next_dispatch = dispatch_at + self.min_time
            return dispatch_at - now

    def schedule(self, func: Callable[[], T]) -> T:
        """
        Run ``func`` once a concurrency slot and a dispatch slot are free.

        Returns:
            Whatever ``func`` returns; exceptions propagate unchanged
        """
        with self._slots:
            wait = self._reserve_dispatch_time()
            if wait > 0:
                self._sleep(wait)
            return func()
