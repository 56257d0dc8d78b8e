# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Binds the server-side session to the request and its cookie."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, Response, g, request

from bareddit.infrastructure.sessions import RequestSession, ServerSessionStore
from bareddit.shared.config import AppConfig


@dataclass(slots=True, frozen=True)
class SessionCookie:
    name: str
    max_age: int
    secure: bool
    samesite: str = "Lax"
    httponly: bool = True

    @classmethod
    def from_config(cls, config: AppConfig) -> "SessionCookie":
        return cls(
            name=config.session.cookie_name,
            max_age=config.session.max_age,
            secure=config.cookie_secure,
            samesite=config.session.cookie_samesite,
        )


def current_session() -> RequestSession:
    session = g.get("session")
    if session is None:
        raise RuntimeError("configure_sessions() was not applied to this app")
    return session


def configure_sessions(app: Flask, sessions: ServerSessionStore, cookie: SessionCookie) -> None:
    @app.before_request
    def _load_session() -> None:
        session = sessions.load(request.cookies.get(cookie.name))
        g.session = session
        g.user_id = session.user_id

    @app.after_request
    def _write_cookie(resp: Response) -> Response:
        session: RequestSession | None = g.get("session")
        if session is None:
            return resp
        g.user_id = session.user_id
        if session.destroyed:
            resp.delete_cookie(
                cookie.name,
                httponly=cookie.httponly,
                samesite=cookie.samesite,
                secure=cookie.secure,
            )
        elif session.modified:
            resp.set_cookie(
                cookie.name,
                session.cookie_value() or "",
                max_age=cookie.max_age,
                httponly=cookie.httponly,
                samesite=cookie.samesite,
                secure=cookie.secure,
            )
        return resp


__all__ = ["SessionCookie", "configure_sessions", "current_session"]
