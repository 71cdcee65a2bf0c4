# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from inkwell.shared.errors import ConflictError, UnauthorizedError


class EmailAlreadyRegisteredError(ConflictError):
    code = "email_taken"
    message = "Email is already registered"

    def __init__(self) -> None:
        super().__init__(context={"field": "email"})


class UsernameTakenError(ConflictError):
    code = "username_taken"
    message = "Username is already taken"

    def __init__(self) -> None:
        super().__init__(context={"field": "username"})


class InvalidCredentialsError(UnauthorizedError):
    code = "invalid_credentials"
    message = "Invalid credentials"


class MissingTokenError(UnauthorizedError):
    message = "Not authorized, no token"


class InvalidTokenError(UnauthorizedError):
    message = "Not authorized, token failed"
