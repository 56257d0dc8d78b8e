# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Input checks for the auth use cases.

Each function returns the first failing check only; violations are never
aggregated.
"""

from __future__ import annotations

from bareddit.domain.users.entities import FieldError

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 4


def _password_error(field: str, password: str) -> FieldError | None:
    if len(password) < MIN_PASSWORD_LENGTH:
        return FieldError(field=field, message="Length must be greater than 3")
    return None


def validate_register(username: str, email: str, password: str) -> FieldError | None:
    if len(username) < MIN_USERNAME_LENGTH:
        return FieldError(field="username", message="Length must be greater than 2")

    if "@" in username:
        return FieldError(field="username", message="Cannot include an @")

    if "@" not in email:
        return FieldError(field="email", message="Email address must be valid")

    return _password_error("password", password)


def validate_new_password(new_password: str) -> FieldError | None:
    return _password_error("newPassword", new_password)


__all__ = ["validate_new_password", "validate_register"]
