"""
book.py – active trade book with the trade counter hooked in
-----------------------------------------------------------
`open_trade()` writes the trade to `live:trades:active` first; only once
Redis has accepted it does the daily counter get bumped, fire-and-forget.
A failed write raises and nothing is counted.  A failed count is logged by
the recorder and the trade stands.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from shared.constants import KEY_TICKET_SEQ, KEY_TRADES_ACTIVE
from shared.logging import get_logger
from trade_counter import CounterStore, TradeRecorder

log = get_logger("trade_manager.book")


class TradeBook:
    def __init__(
        self,
        client: Optional[Any] = None,
        recorder: Optional[TradeRecorder] = None,
    ) -> None:
        if client is None:
            from shared.redis_client import rds
            client = rds
        self.client = client
        self.recorder = recorder or TradeRecorder(CounterStore(client))

    def open_trade(self, trade: Dict[str, Any]) -> str:
        """Persist `trade` and return its ticket."""
        ticket = str(self.client.incr(KEY_TICKET_SEQ))
        row = dict(trade)
        row.setdefault(
            "timestamp_open",
            datetime.now(tz=timezone.utc).isoformat(timespec="seconds"),
        )
        self.client.hset(KEY_TRADES_ACTIVE, ticket, json.dumps(row))
        log.info("trade %s opened – %s %s", ticket,
                 row.get("pair", "?"), row.get("dir", "?"))

        self.recorder.submit()
        return ticket

