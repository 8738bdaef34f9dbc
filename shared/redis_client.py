"""
redis_client.py – singleton Redis connection
============================================

• 100 % lazy: the client is built on first attribute access.
• No connect/retry loop – a dead Redis surfaces as redis ConnectionError /
  TimeoutError on the call itself and callers decide what to do with it
  (the counter store turns them into `StoreUnavailable`).
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import redis

from .config import env
from .logging import get_logger

# ───── CONFIG ──────────────────────────────────────────────────────────
REDIS_URL     = env("REDIS_URL", "redis://redis:6379/0")
REDIS_TIMEOUT = env("REDIS_TIMEOUT", 2.0, cast=float)
log = get_logger("shared.redis")


# ───── LAZY SINGLETON ─────────────────────────────────────────────────
class _LazyRedis:
    """Proxy object that builds the client on first attribute access."""
    _client: Optional[redis.Redis] = None

    def __getattr__(self, name: str) -> Callable[..., Any]:  # noqa: D401
        if self._client is None:
            self._connect()
        return getattr(self._client, name)

    def _connect(self) -> None:
        self._client = redis.Redis.from_url(
            REDIS_URL,
            decode_responses=True,
            socket_timeout=REDIS_TIMEOUT,
            socket_connect_timeout=REDIS_TIMEOUT,
        )
        log.info("Redis client ready for %s", REDIS_URL)


# Exposed singleton used by all services
rds: redis.Redis = _LazyRedis()  # type: ignore[assignment]
