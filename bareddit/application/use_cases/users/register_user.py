# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from bareddit.application.interfaces import SessionContext
from bareddit.domain.users.entities import NewUser, UserResponse
from bareddit.domain.users.outcomes import UserConflict, UserCreated
from bareddit.domain.users.repositories import PasswordHasher, UserRepository
from bareddit.shared.logging import logger

from .validation import validate_register

USERNAME_TAKEN = "username already taken"
GENERIC_FAILURE = "Something went horribly wrong, please try again"


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self, username: str, email: str, password: str, session: SessionContext
    ) -> UserResponse:
        error = validate_register(username, email, password)
        if error is not None:
            return UserResponse(errors=[error])

        hashed = self._password_hasher.hash(password)
        outcome = self._users.add(
            NewUser(username=username, email=email, password_hash=hashed)
        )

        if isinstance(outcome, UserConflict):
            logger.info(f"auth.register: conflict constraint={outcome.constraint}")
            return UserResponse.failure("username", USERNAME_TAKEN)
        if not isinstance(outcome, UserCreated):
            logger.error(f"auth.register: persistence failure reason={outcome.reason}")
            return UserResponse.failure("username", GENERIC_FAILURE)

        session.establish(outcome.user.id)
        logger.info(f"auth.register: ok user_id={outcome.user.id}")
        return UserResponse.success(outcome.user)
