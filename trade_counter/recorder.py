"""
recorder.py – count a trade once it is safely persisted
------------------------------------------------------
`record()` is the plain synchronous increment.  `submit()` is what the
trade-creation path calls: it hands `record()` to a small thread pool and
returns at once.  Whatever goes wrong in there ends up in the error sink,
never in the caller – losing a count is fine, slowing down or failing a
trade is not.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Optional

from shared.config import env
from shared.dates import now_utc, utc_day
from shared.logging import get_logger

from .store import CounterStore

log = get_logger("trade_counter.recorder")

ErrorSink = Callable[[BaseException], None]

RECORDER_WORKERS = env("RECORDER_WORKERS", 2, cast=int)


def log_error(exc: BaseException) -> None:
    """Default sink – log and move on."""
    log.error("trade count increment lost – %s", exc,
              exc_info=(type(exc), exc, exc.__traceback__))


class TradeRecorder:
    def __init__(
        self,
        store: CounterStore,
        clock: Callable[[], datetime] = now_utc,
        executor: Optional[Executor] = None,
        on_error: Optional[ErrorSink] = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=RECORDER_WORKERS, thread_name_prefix="trade-recorder"
        )
        self.on_error = on_error or log_error

    def record(self) -> int:
        """Increment today's (UTC) bucket; raises StoreUnavailable."""
        count = self.store.increment(utc_day(self.clock()))
        log.debug("trade counted – today=%d", count)
        return count

    def submit(self) -> Future:
        """Schedule `record()` without waiting for it."""
        try:
            fut = self.executor.submit(self.record)
        except RuntimeError as exc:             # executor already shut down
            self._sink(exc)
            done: Future = Future()
            done.set_result(None)
            return done
        fut.add_done_callback(self._on_done)
        return fut

    def _on_done(self, fut: Future) -> None:
        if fut.cancelled():
            return
        exc = fut.exception()
        if exc is not None:
            self._sink(exc)

    def _sink(self, exc: BaseException) -> None:
        try:
            self.on_error(exc)
        except Exception:                       # noqa: BLE001
            log.exception("recorder error sink raised")

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self.executor.shutdown(wait=wait)
