# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, request

from inkwell.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from inkwell.domain.users.exceptions import MissingTokenError
from inkwell.shared.logging import logger


def bearer_token() -> str | None:
    """Token from ``Authorization: Bearer <token>``, or ``None``."""

    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class BearerAuth:
    """Wraps views so they receive the authenticated ``user`` keyword argument."""

    def __init__(self, authenticate_use_case: AuthenticateUserUseCase) -> None:
        self._authenticate = authenticate_use_case

    def required(self, view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Any:
            token = bearer_token()
            if token is None:
                logger.warning(f"No bearer token on {request.method} {request.path}")
                raise MissingTokenError()

            user = self._authenticate.execute(token)
            g.user_id = user.id
            logger.debug(f"Auth OK: user={user.id} {request.method} {request.path}")
            return view(*args, user=user, **kwargs)

        return inner


__all__ = ["BearerAuth", "bearer_token"]
