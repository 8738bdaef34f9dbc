from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from datetime import datetime, timezone
from typing import Any, Callable

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError


class FakeRedis:
    """In-memory stand-in for the handful of redis-py calls the services use."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.hashes: dict[str, dict[str, str]] = {}
        self.ttls: dict[str, int] = {}
        self.expire_calls: list[tuple[str, int]] = []
        self.mget_calls: list[list[str]] = []
        self.fail = False
        self.fail_expire = False
        self._lock = threading.Lock()

    def _check(self) -> None:
        if self.fail:
            raise RedisConnectionError("Error 111 connecting to redis:6379. Connection refused.")

    def incr(self, key: str) -> int:
        self._check()
        with self._lock:            # INCR is atomic server-side
            value = int(self.data.get(key, 0)) + 1
            self.data[key] = str(value)
        return value

    def expire(self, key: str, seconds: int) -> bool:
        self._check()
        if self.fail_expire:
            raise RedisConnectionError("Connection reset by peer")
        self.expire_calls.append((key, seconds))
        self.ttls[key] = seconds
        return key in self.data

    def mget(self, keys: list[str]) -> list[str | None]:
        self._check()
        self.mget_calls.append(list(keys))
        return [self.data.get(k) for k in keys]

    def set(self, key: str, value: Any) -> bool:
        self._check()
        self.data[key] = str(value)
        return True

    def hset(self, name: str, key: str, value: str) -> int:
        self._check()
        bucket = self.hashes.setdefault(name, {})
        added = 0 if key in bucket else 1
        bucket[key] = value
        return added

    def hget(self, name: str, key: str) -> str | None:
        self._check()
        return self.hashes.get(name, {}).get(key)

    def hlen(self, name: str) -> int:
        self._check()
        return len(self.hashes.get(name, {}))


class InlineExecutor:
    """Runs submitted work on the spot so fire-and-forget tests are deterministic."""

    def __init__(self) -> None:
        self.submitted = 0

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        self.submitted += 1
        fut: Future = Future()
        try:
            fut.set_result(fn(*args, **kwargs))
        except Exception as exc:  # noqa: BLE001
            fut.set_exception(exc)
        return fut

    def shutdown(self, wait: bool = True) -> None:
        pass


class FixedClock:
    def __init__(self, when: datetime) -> None:
        self.now = when

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 3, 15, 12, 30, tzinfo=timezone.utc))


@pytest.fixture
def logs(caplog):
    """Hook caplog onto service loggers (they do not propagate to root)."""
    attached: list[logging.Logger] = []

    def attach(name: str):
        logger = logging.getLogger(name)
        logger.addHandler(caplog.handler)
        attached.append(logger)
        return caplog

    yield attach
    for logger in attached:
        logger.removeHandler(caplog.handler)


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()
