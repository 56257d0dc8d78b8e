# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from bareddit.application.interfaces import SessionContext
from bareddit.domain.users.entities import UserResponse
from bareddit.domain.users.repositories import PasswordHasher, UserRepository
from bareddit.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self, username_or_email: str, password: str, session: SessionContext
    ) -> UserResponse:
        if "@" in username_or_email:
            user = self._users.find_by_email(username_or_email)
        else:
            user = self._users.find_by_username(username_or_email)

        if user is None:
            logger.info("auth.login: unknown identifier")
            return UserResponse.failure("usernameOrEmail", "That username doesn't exist")

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"auth.login: bad password user_id={user.id}")
            return UserResponse.failure("password", "Incorrect password")

        session.establish(user.id)
        logger.info(f"auth.login: ok user_id={user.id}")
        return UserResponse.success(user)
