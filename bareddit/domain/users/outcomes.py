# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Typed results returned by the credential store when creating users."""

from __future__ import annotations

from dataclasses import dataclass

from .entities import User


@dataclass(slots=True, frozen=True)
class UserCreated:
    user: User


@dataclass(slots=True, frozen=True)
class UserConflict:
    """A unique constraint on username or email rejected the insert."""

    constraint: str | None = None


@dataclass(slots=True, frozen=True)
class PersistenceFailure:
    reason: str


CreateUserOutcome = UserCreated | UserConflict | PersistenceFailure
