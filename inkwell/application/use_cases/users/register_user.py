# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from inkwell.domain.identifiers import new_id
from inkwell.domain.users.entities import User
from inkwell.domain.users.exceptions import EmailAlreadyRegisteredError, UsernameTakenError
from inkwell.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from inkwell.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, username: str, email: str, password: str) -> tuple[User, str]:
        email = email.strip().lower()
        username = username.strip()

        # Email collisions are reported first, even if the username collides too.
        if self._users.find_by_email(email):
            raise EmailAlreadyRegisteredError()
        if self._users.find_by_username(username):
            raise UsernameTakenError()

        user = User(
            id=new_id(),
            username=username,
            email=email,
            password_hash=self._password_hasher.hash(password),
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        issued = self._tokens.issue(persisted.id)
        logger.info(f"auth.signup: ok user_id={persisted.id}")
        return persisted, issued.token
