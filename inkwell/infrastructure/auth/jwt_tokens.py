# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless bearer tokens signed with a shared secret.

A token carries the user id (``sub``) and an expiry, nothing else. There is
no server-side record and therefore no revocation; logging out is a client
concern.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt as pyjwt

from inkwell.domain.identifiers import is_well_formed_id
from inkwell.domain.users.entities import IssuedToken
from inkwell.domain.users.exceptions import InvalidTokenError
from inkwell.domain.users.repositories import TokenService
from inkwell.shared.logging import logger


class JwtTokenService(TokenService):
    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=30),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue(self, user_id: str) -> IssuedToken:
        issued_at = self._clock()
        expires_at = issued_at + self._ttl
        token = pyjwt.encode(
            {"sub": user_id, "iat": issued_at, "exp": expires_at},
            self._secret,
            algorithm=self._algorithm,
        )
        logger.debug(f"auth.token: issued user={user_id} exp={expires_at.isoformat()}")
        return IssuedToken(user_id=user_id, token=token, expires_at=expires_at)

    def verify(self, token: str) -> str:
        """Return the user id bound to ``token``.

        Raises:
            InvalidTokenError: malformed, badly signed, or expired token.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except pyjwt.ExpiredSignatureError as exc:
            logger.info("auth.token: expired")
            raise InvalidTokenError(message="Not authorized, token expired") from exc
        except pyjwt.PyJWTError as exc:
            logger.info(f"auth.token: rejected ({type(exc).__name__})")
            raise InvalidTokenError() from exc

        user_id = payload.get("sub")
        if not is_well_formed_id(user_id):
            raise InvalidTokenError()
        return str(user_id)


__all__ = ["JwtTokenService"]
