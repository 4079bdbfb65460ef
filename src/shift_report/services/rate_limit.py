"""Per-source request throttling for the relay endpoint."""

import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from shift_report.domain.errors import RateLimitedError


class RateLimiter(Protocol):
    """Request gate keyed by request source."""

    def check(self, key: str) -> None:
        """Record a request or raise RateLimitedError."""


@dataclass
class SlidingWindowRateLimiter(RateLimiter):
    """In-memory sliding window limiter.

    State is process-local and lost on restart. Several relay instances each
    keep their own counts, so deployments running more than one instance need
    a limiter backed by a shared cache instead.

    Sources idle for a whole window are dropped by a sweep that runs at most
    once per window, so spoofed source keys do not accumulate.
    """

    max_requests: int = 5
    window_seconds: float = 60.0
    clock: Callable[[], float] = time.monotonic
    _requests: dict[str, deque[float]] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)
    _last_sweep: float | None = field(default=None, init=False)

    def check(self, key: str) -> None:
        """Allow the request or raise when the window is full."""
        now = self.clock()
        with self._lock:
            self._sweep(now)
            recent = self._requests.setdefault(key, deque())
            while recent and now - recent[0] >= self.window_seconds:
                recent.popleft()
            if len(recent) >= self.max_requests:
                retry_after = self.window_seconds - (now - recent[0])
                raise RateLimitedError(key, retry_after)
            recent.append(now)

    def reset(self) -> None:
        """Forget all recorded requests."""
        with self._lock:
            self._requests.clear()
            self._last_sweep = None

    def tracked_sources(self) -> int:
        """Number of request sources currently held in memory."""
        with self._lock:
            return len(self._requests)

    def _sweep(self, now: float) -> None:
        # At most once per window; caller holds the lock.
        last = self._last_sweep
        if last is not None and now - last < self.window_seconds:
            return
        self._last_sweep = now
        stale = [
            key
            for key, recent in self._requests.items()
            if not recent or now - recent[-1] >= self.window_seconds
        ]
        for key in stale:
            del self._requests[key]
