# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Server-side sessions referenced by a signed, opaque cookie."""

from __future__ import annotations

import json
import secrets
from typing import Any

from itsdangerous import BadSignature, Signer

from bareddit.application.interfaces import SessionContext
from bareddit.domain.users.repositories import KeyValueStore
from bareddit.shared.logging import logger

SESSION_PREFIX = "sess:"
_SALT = "bareddit.session"


class ServerSessionStore:
    """Persist session payloads in a key-value store keyed by session id."""

    def __init__(self, store: KeyValueStore, *, secret_key: str, ttl: int) -> None:
        self._store = store
        self._signer = Signer(secret_key, salt=_SALT)
        self._ttl = ttl

    @property
    def ttl(self) -> int:
        return self._ttl

    def sign(self, session_id: str) -> str:
        return self._signer.sign(session_id).decode("utf-8")

    def unsign(self, cookie_value: str) -> str | None:
        try:
            return self._signer.unsign(cookie_value).decode("utf-8")
        except BadSignature:
            logger.warning("session: rejected cookie with bad signature")
            return None

    def load(self, cookie_value: str | None) -> "RequestSession":
        if not cookie_value:
            return RequestSession(self)
        session_id = self.unsign(cookie_value)
        if session_id is None:
            return RequestSession(self)

        raw = self._store.get(SESSION_PREFIX + session_id)
        if raw is None:
            return RequestSession(self)
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.warning("session: discarded undecodable payload")
            return RequestSession(self)
        if not isinstance(payload, dict):
            return RequestSession(self)
        return RequestSession(self, session_id=session_id, payload=payload)

    def save(self, session_id: str, payload: dict[str, Any]) -> None:
        self._store.set(SESSION_PREFIX + session_id, json.dumps(payload), self._ttl)

    def remove(self, session_id: str) -> None:
        self._store.delete(SESSION_PREFIX + session_id)

    @staticmethod
    def new_session_id() -> str:
        return secrets.token_urlsafe(32)


class RequestSession(SessionContext):
    """One request's view of a session.

    The session id is kept when the caller already holds a live session; a new
    one is minted only when none exists. ``modified`` and ``destroyed`` tell
    the HTTP layer whether to set or clear the cookie.
    """

    def __init__(
        self,
        sessions: ServerSessionStore,
        *,
        session_id: str | None = None,
        payload: dict[str, Any] | None = None,
    ) -> None:
        self._sessions = sessions
        self.session_id = session_id
        self._payload: dict[str, Any] = dict(payload or {})
        self.modified = False
        self.destroyed = False

    @property
    def user_id(self) -> int | None:
        value = self._payload.get("userId")
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def establish(self, user_id: int) -> None:
        if self.session_id is None:
            self.session_id = self._sessions.new_session_id()
        self._payload["userId"] = user_id
        self._sessions.save(self.session_id, self._payload)
        self.modified = True
        self.destroyed = False

    def destroy(self) -> None:
        if self.session_id is not None:
            self._sessions.remove(self.session_id)
        self.session_id = None
        self._payload = {}
        self.modified = False
        self.destroyed = True

    def cookie_value(self) -> str | None:
        if self.session_id is None:
            return None
        return self._sessions.sign(self.session_id)


__all__ = ["RequestSession", "ServerSessionStore", "SESSION_PREFIX"]
