# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Key-value stores with per-key expiry backing sessions and reset tokens."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

import redis

from bareddit.domain.users.exceptions import KeyValueStoreError
from bareddit.domain.users.repositories import KeyValueStore
from bareddit.shared.config import RedisConfig
from bareddit.shared.logging import logger


@dataclass(slots=True)
class _Entry:
    value: str
    expires_at: float | None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store for development and tests.

    Expiry is checked when a key is read; every ``sweep_every`` writes the
    whole dict is purged of expired entries so unread keys do not pile up.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        *,
        sweep_every: int = 256,
    ) -> None:
        self._clock = clock
        self._lock = Lock()
        self._store: dict[str, _Entry] = {}
        self._sweep_every = sweep_every
        self._writes = 0

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                logger.debug(f"kv: expired key={key}")
                self._store.pop(key, None)
                return None
            return entry.value

    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        expires_at = self._clock() + ttl if ttl is not None else None
        with self._lock:
            self._store[key] = _Entry(value=value, expires_at=expires_at)
            self._writes += 1
            if self._writes >= self._sweep_every:
                self._writes = 0
                self._purge_locked(self._clock())

    def purge_expired(self) -> int:
        with self._lock:
            return self._purge_locked(self._clock())

    def _purge_locked(self, now: float) -> int:
        expired = [key for key, entry in self._store.items() if entry.is_expired(now)]
        for key in expired:
            del self._store[key]
        if expired:
            logger.debug(f"kv: purged {len(expired)} expired keys")
        return len(expired)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for entry in self._store.values() if not entry.is_expired(now))


class RedisKeyValueStore(KeyValueStore):
    """
    Redis-backed store; expiry is delegated to Redis ``EX``.

    The client is thread safe and connections are taken from its pool when a
    command runs, so one instance serves the whole process.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._r = client

    @classmethod
    def from_config(cls, config: RedisConfig) -> "RedisKeyValueStore":
        if not config.url:
            raise ValueError("REDIS_URL is required for the redis store")
        logger.debug("kv: new redis client")
        client = redis.Redis.from_url(
            config.url,
            decode_responses=True,
            socket_timeout=config.socket_timeout,
            socket_connect_timeout=config.socket_timeout,
        )
        return cls(client)

    def get(self, key: str) -> str | None:
        try:
            value = self._r.get(key)
        except redis.exceptions.RedisError as exc:
            raise KeyValueStoreError("get") from exc
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str, ttl: int | None = None) -> None:
        try:
            self._r.set(key, value, ex=ttl)
        except redis.exceptions.RedisError as exc:
            raise KeyValueStoreError("set") from exc

    def delete(self, key: str) -> None:
        try:
            self._r.delete(key)
        except redis.exceptions.RedisError as exc:
            raise KeyValueStoreError("delete") from exc

    def ping(self) -> bool:
        try:
            return bool(self._r.ping())
        except redis.exceptions.RedisError as exc:
            raise KeyValueStoreError("ping") from exc


def build_kv_store(config: RedisConfig) -> KeyValueStore:
    if config.url:
        return RedisKeyValueStore.from_config(config)
    logger.warning("kv: REDIS_URL not set, sessions and reset tokens are kept in memory")
    return InMemoryKeyValueStore()


__all__ = ["InMemoryKeyValueStore", "RedisKeyValueStore", "build_kv_store"]
