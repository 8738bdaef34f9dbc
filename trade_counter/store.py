"""
store.py – daily trade buckets in Redis
--------------------------------------
Key   : <prefix>:<YYYY-MM-DD>      (prefix default: stats:trades:daily)
Value : integer string
TTL   : 35 days, set once when the bucket is created (INCR returned 1)
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from shared.constants import BUCKET_TTL_SEC, KEY_TRADES_DAILY
from shared.dates import day_str
from shared.errors import StoreUnavailable
from shared.logging import get_logger

log = get_logger("trade_counter.store")

Day = Union[date, str]

_UNAVAILABLE = (RedisConnectionError, RedisTimeoutError)


def _as_day(day: Day) -> str:
    return day if isinstance(day, str) else day_str(day)


class CounterStore:
    """Atomic per-day counters on top of a redis-py style client."""

    def __init__(
        self,
        client: Optional[Any] = None,
        prefix: str = KEY_TRADES_DAILY,
        ttl: int = BUCKET_TTL_SEC,
    ) -> None:
        if client is None:
            from shared.redis_client import rds
            client = rds
        self.client = client
        self.prefix = prefix
        self.ttl = ttl

    def key_for(self, day: Day) -> str:
        return f"{self.prefix}:{_as_day(day)}"

    def increment(self, day: Day) -> int:
        """INCR the bucket for `day`; the first write also arms the TTL."""
        key = self.key_for(day)
        try:
            value = int(self.client.incr(key))
        except _UNAVAILABLE as exc:
            raise StoreUnavailable(f"increment {key} failed: {exc}") from exc
        if value == 1:
            try:
                self.client.expire(key, self.ttl)
            except _UNAVAILABLE as exc:
                # the count landed; only the expiry is missing
                log.error("EXPIRE %s failed, bucket has no TTL – %s", key, exc)
        return value

    def get_many(self, days: Iterable[Day]) -> Dict[str, int]:
        """One MGET for all `days`; missing buckets read as 0."""
        names: List[str] = [_as_day(d) for d in days]
        if not names:
            return {}
        keys = [self.key_for(d) for d in names]
        try:
            raw = self.client.mget(keys)
        except _UNAVAILABLE as exc:
            raise StoreUnavailable(f"mget of {len(keys)} buckets failed: {exc}") from exc
        return {name: int(val) if val is not None else 0 for name, val in zip(names, raw)}
