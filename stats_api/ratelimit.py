"""Per-client sliding-window request cap."""

from __future__ import annotations

import time
from collections import defaultdict, deque
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Deque, DefaultDict

from shared.constants import RATE_LIMIT, RATE_LIMIT_MSG, RATE_WINDOW
from shared.errors import RateLimited

SWEEP_EVERY = 1000      # accepted requests between stale-client sweeps


@dataclass
class RateLimitConfig:
    max_requests: int = RATE_LIMIT
    time_window: float = RATE_WINDOW    # seconds


class SlidingWindowLimiter:
    """
    Remembers the accepted-request timestamps of each client for one window.

    A request is accepted while fewer than `max_requests` timestamps fall
    inside the last `time_window` seconds; otherwise `RateLimited` is raised
    straight away (nothing is queued).  Rejected requests do not count.
    """

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        time_provider: Callable[[], float] | None = None,
    ) -> None:
        self.config = config or RateLimitConfig()
        self._time_provider = time_provider or time.monotonic
        self._history: DefaultDict[str, Deque[float]] = defaultdict(deque)
        self._lock = Lock()
        self._calls = 0

    def check(self, identity: str) -> None:
        with self._lock:
            now = self._time_provider()
            history = self._history[identity]
            cutoff = now - self.config.time_window
            while history and history[0] <= cutoff:
                history.popleft()

            if len(history) >= self.config.max_requests:
                retry_after = max(0.0, history[0] + self.config.time_window - now)
                raise RateLimited(RATE_LIMIT_MSG, retry_after=retry_after)

            history.append(now)
            self._calls += 1
            if self._calls % SWEEP_EVERY == 0:
                self._sweep(cutoff)

    def _sweep(self, cutoff: float) -> None:
        """Forget clients whose whole history has aged out (lock held)."""
        stale = [k for k, h in self._history.items() if not h or h[-1] <= cutoff]
        for k in stale:
            del self._history[k]

