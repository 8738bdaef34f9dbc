"""
aggregator.py – rolling trade totals over daily buckets
------------------------------------------------------
Everything is recomputed per call from one batched read; HTTP cache headers
in front of the API are the only cache.  No retries, no partial answers –
a StoreUnavailable from the store goes straight up.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict

from shared.constants import WINDOW_LONG, WINDOW_SHORT
from shared.dates import iso_utc, last_days, now_utc, utc_day

from .store import CounterStore


@dataclass(frozen=True)
class AggregateStats:
    trades_7d: int
    trades_30d: int
    last_updated: str           # ISO-8601, UTC

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TradeCount:
    total: int
    daily: Dict[str, int] = field(default_factory=dict)   # newest first

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "daily": dict(self.daily)}


class Aggregator:
    def __init__(
        self,
        store: CounterStore,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self.store = store
        self.clock = clock

    def _window(self, now: datetime, days: int) -> Dict[str, int]:
        dates = last_days(utc_day(now), days)
        counts = self.store.get_many(dates)
        return {d: counts.get(d, 0) for d in dates}

    def widget_stats(self) -> AggregateStats:
        """7-day and 30-day totals ending today (UTC)."""
        now = self.clock()
        values = list(self._window(now, WINDOW_LONG).values())
        return AggregateStats(
            trades_7d=sum(values[:WINDOW_SHORT]),
            trades_30d=sum(values),
            last_updated=iso_utc(now),
        )

    def trade_count(self, days: int) -> TradeCount:
        """Total plus per-day breakdown for the last `days` days."""
        if days < 1:
            raise ValueError(f"days must be >= 1, got {days}")
        daily = self._window(self.clock(), days)
        return TradeCount(total=sum(daily.values()), daily=daily)
