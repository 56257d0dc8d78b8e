# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from bareddit.application.interfaces import ResetTokenPort, SessionContext
from bareddit.domain.users.entities import UserResponse
from bareddit.domain.users.repositories import PasswordHasher, UserRepository
from bareddit.shared.logging import logger

from .validation import validate_new_password


class ChangePasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        reset_tokens: ResetTokenPort,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._reset_tokens = reset_tokens
        self._password_hasher = password_hasher

    def execute(
        self, token: str, new_password: str, session: SessionContext
    ) -> UserResponse:
        error = validate_new_password(new_password)
        if error is not None:
            return UserResponse(errors=[error])

        user_id = self._reset_tokens.resolve(token)
        if user_id is None:
            logger.info("auth.change_password: unknown or expired token")
            return UserResponse.failure("token", "token expired")

        if self._users.find_by_id(user_id) is None:
            logger.warning(f"auth.change_password: token for missing user_id={user_id}")
            return UserResponse.failure("token", "user no longer exists")

        user = self._users.update_password(user_id, self._password_hasher.hash(new_password))
        if user is None:
            return UserResponse.failure("token", "user no longer exists")

        # Single use: a crash before this line leaves the token valid until it expires.
        self._reset_tokens.consume(token)

        session.establish(user.id)
        logger.info(f"auth.change_password: ok user_id={user.id}")
        return UserResponse.success(user)
