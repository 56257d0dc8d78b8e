# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from bareddit.application.interfaces import SessionContext
from bareddit.domain.users.entities import User
from bareddit.domain.users.repositories import UserRepository


class CurrentUserUseCase:
    """Resolve the user bound to the caller's session without touching it."""

    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, session: SessionContext) -> User | None:
        user_id = session.user_id
        if user_id is None:
            return None
        return self._users.find_by_id(user_id)
