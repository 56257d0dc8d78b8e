# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid

from bareddit.application.interfaces import ResetTokenPort
from bareddit.domain.users.repositories import KeyValueStore

FORGET_PASSWORD_PREFIX = "forget-password:"


class ResetTokenStore(ResetTokenPort):
    """Single-use password reset tokens mapped to user ids."""

    def __init__(self, store: KeyValueStore, *, ttl: int) -> None:
        self._store = store
        self._ttl = ttl

    def issue(self, user_id: int) -> str:
        token = str(uuid.uuid4())
        self._store.set(FORGET_PASSWORD_PREFIX + token, str(user_id), self._ttl)
        return token

    def resolve(self, token: str) -> int | None:
        if not token:
            return None
        raw = self._store.get(FORGET_PASSWORD_PREFIX + token)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            return None

    def consume(self, token: str) -> None:
        self._store.delete(FORGET_PASSWORD_PREFIX + token)


__all__ = ["FORGET_PASSWORD_PREFIX", "ResetTokenStore"]
