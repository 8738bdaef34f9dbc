from __future__ import annotations

from datetime import date

import pytest

from shared.constants import BUCKET_TTL_SEC
from shared.errors import StoreUnavailable
from trade_counter.store import CounterStore

D = date(2026, 3, 15)


def test_key_format(fake_redis):
    store = CounterStore(fake_redis, prefix="stats:trades:daily")
    assert store.key_for(D) == "stats:trades:daily:2026-03-15"
    assert store.key_for("2026-03-15") == "stats:trades:daily:2026-03-15"


def test_increment_five_times_reads_five(fake_redis):
    store = CounterStore(fake_redis)
    results = [store.increment(D) for _ in range(5)]
    assert results == [1, 2, 3, 4, 5]
    assert store.get_many([D]) == {"2026-03-15": 5}


def test_ttl_set_exactly_once(fake_redis):
    store = CounterStore(fake_redis, prefix="p")
    store.increment(D)
    store.increment(D)
    store.increment(D)
    assert fake_redis.expire_calls == [("p:2026-03-15", BUCKET_TTL_SEC)]
    assert BUCKET_TTL_SEC == 35 * 24 * 3600


def test_ttl_per_bucket(fake_redis):
    store = CounterStore(fake_redis, prefix="p")
    store.increment("2026-03-15")
    store.increment("2026-03-16")
    assert [k for k, _ in fake_redis.expire_calls] == ["p:2026-03-15", "p:2026-03-16"]


def test_backfilled_bucket_is_not_rearmed(fake_redis):
    store = CounterStore(fake_redis, prefix="p")
    fake_redis.set("p:2026-03-15", 41)
    assert store.increment(D) == 42
    assert fake_redis.expire_calls == []


def test_get_many_missing_reads_zero_single_round_trip(fake_redis):
    store = CounterStore(fake_redis, prefix="p")
    store.increment("2026-03-14")
    got = store.get_many(["2026-03-15", "2026-03-14", "2026-03-13"])
    assert got == {"2026-03-15": 0, "2026-03-14": 1, "2026-03-13": 0}
    assert list(got) == ["2026-03-15", "2026-03-14", "2026-03-13"]
    assert len(fake_redis.mget_calls) == 1


def test_get_many_empty(fake_redis):
    assert CounterStore(fake_redis).get_many([]) == {}
    assert fake_redis.mget_calls == []


def test_connection_errors_become_store_unavailable(fake_redis):
    store = CounterStore(fake_redis)
    fake_redis.fail = True
    with pytest.raises(StoreUnavailable):
        store.increment(D)
    with pytest.raises(StoreUnavailable):
        store.get_many([D])


def test_expire_failure_keeps_the_count(fake_redis, logs):
    caplog = logs("trade_counter.store")
    store = CounterStore(fake_redis, prefix="p")
    fake_redis.fail_expire = True

    assert store.increment(D) == 1

    assert fake_redis.data == {"p:2026-03-15": "1"}
    assert fake_redis.ttls == {}
    assert any("no TTL" in r.getMessage() for r in caplog.records)
