# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import NewUser, User
from .outcomes import CreateUserOutcome


class UserRepository(Protocol):
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_email(self, email: str) -> User | None: ...
    def add(self, user: NewUser) -> CreateUserOutcome: ...
    def update_password(self, user_id: int, password_hash: str) -> User | None: ...


class KeyValueStore(Protocol):
    """String key-value storage with optional per-key expiry in seconds.

    Implementations raise :class:`KeyValueStoreError` when the backing
    store cannot be reached.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str, ttl: int | None = None) -> None: ...
    def delete(self, key: str) -> None: ...
    def ping(self) -> bool: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class MailNotifier(Protocol):
    """Delivers HTML mail; raises :class:`MailDeliveryError` on failure."""

    def send(self, to: str, subject: str, html: str) -> None: ...
