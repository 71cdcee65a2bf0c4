# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from inkwell.domain.users.entities import User as DomainUser
from inkwell.domain.users.exceptions import EmailAlreadyRegisteredError, UsernameTakenError
from inkwell.domain.users.repositories import UserRepository
from inkwell.infrastructure.db.models import User
from inkwell.infrastructure.db.session import session_scope


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            return _to_domain(row) if row else None

    def find_by_username(self, username: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.scalars(select(User).where(User.username == username)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def find_many(self, user_ids: Iterable[str]) -> dict[str, DomainUser]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        with session_scope() as session:
            rows = session.scalars(select(User).where(User.id.in_(ids))).all()
            return {row.id: _to_domain(row) for row in rows}

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope() as session:
                row = User(
                    id=user.id,
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError:
            # Lost a race with a concurrent signup; report the same way the
            # pre-insert checks do.
            if self.find_by_email(user.email):
                raise EmailAlreadyRegisteredError() from None
            raise UsernameTakenError() from None
