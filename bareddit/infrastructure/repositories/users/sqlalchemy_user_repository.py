# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from bareddit.domain.users.entities import NewUser
from bareddit.domain.users.entities import User as DomainUser
from bareddit.domain.users.outcomes import (CreateUserOutcome, PersistenceFailure,
                                            UserConflict, UserCreated)
from bareddit.domain.users.repositories import UserRepository
from bareddit.infrastructure.db.models import User
from bareddit.infrastructure.db.session import Database
from bareddit.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _constraint_name(exc: IntegrityError) -> str | None:
    diag = getattr(exc.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return str(name)
    return None


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def find_by_username(self, username: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.query(User).filter(User.username == username).first()
            return _to_domain(row) if row else None

    def find_by_email(self, email: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def add(self, user: NewUser) -> CreateUserOutcome:
        try:
            with self._db.session_scope() as session:
                row = User(
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                created = _to_domain(row)
        except IntegrityError as exc:
            return UserConflict(constraint=_constraint_name(exc))
        except SQLAlchemyError as exc:
            logger.error(f"users.add: {type(exc).__name__}")
            return PersistenceFailure(reason=type(exc).__name__)
        return UserCreated(user=created)

    def update_password(self, user_id: int, password_hash: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.get(User, user_id)
            if row is None:
                return None
            row.password_hash = password_hash
            session.flush()
            session.refresh(row)
            return _to_domain(row)
