# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class NewUser:
    """Registration data that has passed validation and hashing."""

    username: str
    email: str
    password_hash: str


@dataclass(slots=True, frozen=True)
class FieldError:

    field: str
    message: str


@dataclass(slots=True, frozen=True)
class UserResponse:
    """Either a user or the field errors that prevented producing one."""

    user: User | None = None
    errors: list[FieldError] = field(default_factory=list)

    @classmethod
    def success(cls, user: User) -> "UserResponse":
        return cls(user=user)

    @classmethod
    def failure(cls, field_name: str, message: str) -> "UserResponse":
        return cls(errors=[FieldError(field=field_name, message=message)])

    @property
    def ok(self) -> bool:
        return self.user is not None and not self.errors
