from __future__ import annotations

from unittest import mock

import pytest
import redis

from bareddit.domain.users.exceptions import KeyValueStoreError
from bareddit.infrastructure.kv_store import (InMemoryKeyValueStore,
                                              RedisKeyValueStore, build_kv_store)
from bareddit.shared.config import RedisConfig


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_in_memory_get_set_delete() -> None:
    store = InMemoryKeyValueStore()

    store.set("k", "v")
    assert store.get("k") == "v"

    store.delete("k")
    assert store.get("k") is None
    store.delete("k")


def test_in_memory_entries_expire() -> None:
    clock = FakeClock()
    store = InMemoryKeyValueStore(clock=clock)
    store.set("k", "v", ttl=10)

    clock.now += 9.9
    assert store.get("k") == "v"

    clock.now += 0.1
    assert store.get("k") is None
    assert len(store) == 0


def test_in_memory_set_overwrites_ttl() -> None:
    clock = FakeClock()
    store = InMemoryKeyValueStore(clock=clock)
    store.set("k", "old", ttl=1)
    store.set("k", "new")

    clock.now += 100
    assert store.get("k") == "new"


def test_redis_store_uses_ex_for_ttl() -> None:
    client = mock.MagicMock()
    client.get.return_value = "42"
    store = RedisKeyValueStore(client)

    store.set("forget-password:t", "42", ttl=60)
    assert store.get("forget-password:t") == "42"
    store.delete("forget-password:t")

    client.set.assert_called_once_with("forget-password:t", "42", ex=60)
    client.delete.assert_called_once_with("forget-password:t")


def test_redis_store_decodes_bytes() -> None:
    client = mock.MagicMock()
    client.get.return_value = b"7"

    assert RedisKeyValueStore(client).get("k") == "7"


@pytest.mark.parametrize("method, args", [("get", ("k",)), ("set", ("k", "v", 5)), ("delete", ("k",))])
def test_redis_store_wraps_connection_errors(method: str, args: tuple) -> None:
    client = mock.MagicMock()
    getattr(client, method).side_effect = redis.exceptions.ConnectionError("down")
    store = RedisKeyValueStore(client)

    with pytest.raises(KeyValueStoreError) as excinfo:
        getattr(store, method)(*args)

    assert excinfo.value.code == "kv_store_unavailable"
    assert excinfo.value.context == {"operation": method}


def test_build_kv_store_without_url_is_in_memory() -> None:
    assert isinstance(build_kv_store(RedisConfig(REDIS_URL=None)), InMemoryKeyValueStore)


def test_build_kv_store_with_url_uses_redis() -> None:
    with mock.patch("bareddit.infrastructure.kv_store.redis.Redis.from_url") as from_url:
        store = build_kv_store(RedisConfig(REDIS_URL="redis://localhost:6379/0"))

    assert isinstance(store, RedisKeyValueStore)
    from_url.assert_called_once()
    assert from_url.call_args.kwargs["decode_responses"] is True


def test_in_memory_write_sweeps_unread_expired_keys() -> None:
    clock = FakeClock()
    store = InMemoryKeyValueStore(clock=clock, sweep_every=2)
    store.set("forget-password:abandoned", "1", ttl=5)

    clock.now += 10
    store.set("sess:live", "{}", ttl=60)

    assert store.purge_expired() == 0
    assert store.get("sess:live") == "{}"


def test_in_memory_purge_expired_counts_removed_keys() -> None:
    clock = FakeClock()
    store = InMemoryKeyValueStore(clock=clock, sweep_every=1000)
    store.set("a", "1", ttl=1)
    store.set("b", "2", ttl=1)
    store.set("c", "3")

    clock.now += 2

    assert store.purge_expired() == 2
    assert store.get("c") == "3"


def test_redis_ping_wraps_errors() -> None:
    client = mock.MagicMock()
    client.ping.side_effect = redis.exceptions.TimeoutError("slow")

    with pytest.raises(KeyValueStoreError):
        RedisKeyValueStore(client).ping()
