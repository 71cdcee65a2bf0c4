# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from inkwell.application.use_cases.users.login_user import LoginUserUseCase
from inkwell.application.use_cases.users.register_user import RegisterUserUseCase
from inkwell.domain.users.entities import User
from inkwell.interfaces.http.dto.auth import (
    AuthResponseDTO,
    LoginRequestDTO,
    SignupRequestDTO,
    UserDTO,
)
from inkwell.shared.errors.validation import raise_validation_error
from inkwell.shared.middleware.rate_limit import rate_limit


def _auth_response(user: User, token: str) -> Response:
    payload = AuthResponseDTO(token=token, user=UserDTO.from_domain(user))
    response = jsonify(payload.model_dump(by_alias=True))
    response.headers["Cache-Control"] = "no-store"
    return response


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    @rate_limit(limit=5, window_seconds=60.0)
    def signup(self) -> tuple[Response, int]:
        try:
            dto = SignupRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._register_use_case.execute(dto.username, dto.email, dto.password)
        return _auth_response(user, token), 201

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._login_use_case.execute(dto.email, dto.password)
        return _auth_response(user, token), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
