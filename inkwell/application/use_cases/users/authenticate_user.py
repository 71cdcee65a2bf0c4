"""Use-case for resolving a bearer token to the requesting user."""

from __future__ import annotations

from inkwell.domain.users.entities import User
from inkwell.domain.users.exceptions import InvalidTokenError, MissingTokenError
from inkwell.domain.users.repositories import TokenService, UserRepository


class AuthenticateUserUseCase:
    def __init__(self, *, users: UserRepository, tokens: TokenService) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, token: str | None) -> User:
        if not token:
            raise MissingTokenError()
        user_id = self._tokens.verify(token)
        user = self._users.find_by_id(user_id)
        if user is None:
            raise InvalidTokenError()
        return user
