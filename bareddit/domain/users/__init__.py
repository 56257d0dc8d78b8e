# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import FieldError, NewUser, User, UserResponse
from .exceptions import KeyValueStoreError, MailDeliveryError
from .outcomes import CreateUserOutcome, PersistenceFailure, UserConflict, UserCreated
from .repositories import KeyValueStore, MailNotifier, PasswordHasher, UserRepository

__all__ = [
    "CreateUserOutcome",
    "FieldError",
    "KeyValueStore",
    "KeyValueStoreError",
    "MailDeliveryError",
    "MailNotifier",
    "NewUser",
    "PasswordHasher",
    "PersistenceFailure",
    "User",
    "UserConflict",
    "UserCreated",
    "UserRepository",
    "UserResponse",
]
