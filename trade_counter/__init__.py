"""
trade_counter
=============

Per-day trade counts kept in Redis:

• store.py       – `stats:trades:daily:<YYYY-MM-DD>` buckets, INCR + one-shot EXPIRE,
                   batched MGET.
• recorder.py    – bumps today's bucket after a trade is persisted; fire-and-forget.
• aggregator.py  – rolling 7 d / 30 d totals for the public widget.
"""

from .aggregator import AggregateStats, Aggregator, TradeCount
from .recorder import TradeRecorder
from .store import CounterStore

__all__ = [
    "AggregateStats",
    "Aggregator",
    "CounterStore",
    "TradeCount",
    "TradeRecorder",
]
