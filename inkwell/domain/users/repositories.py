# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from .entities import IssuedToken, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: str) -> User | None: ...
    def find_many(self, user_ids: Iterable[str]) -> dict[str, User]: ...
    def add(self, user: User) -> User: ...


class TokenService(Protocol):
    def issue(self, user_id: str) -> IssuedToken: ...
    def verify(self, token: str) -> str: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
