# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol


class SessionContext(Protocol):
    """The caller's server-side session as seen by a single request."""

    @property
    def user_id(self) -> int | None: ...

    def establish(self, user_id: int) -> None: ...

    def destroy(self) -> None: ...


class ResetTokenPort(Protocol):
    def issue(self, user_id: int) -> str: ...
    def resolve(self, token: str) -> int | None: ...
    def consume(self, token: str) -> None: ...
