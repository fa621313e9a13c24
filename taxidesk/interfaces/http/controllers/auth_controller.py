# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from taxidesk.application.use_cases.users.login_user import LoginUserUseCase
from taxidesk.interfaces.http.dto.auth import LoginRequestDTO, LoginResponseDTO
from taxidesk.shared.errors.validation import raise_validation_error
from taxidesk.shared.middleware.rate_limit import InMemoryRateLimiter, rate_limit


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        limiter: InMemoryRateLimiter | None = None,
    ) -> None:
        self._login_use_case = login_use_case
        self._limiter = limiter

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(dto.username, dto.password)

        payload = LoginResponseDTO(
            token=result.token,
            username=result.username,
            role=result.role.value,
        ).model_dump()
        return jsonify(payload), 200

    def as_blueprint(self, url_prefix: str = "/api") -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix=f"{url_prefix}/auth")
        bp.add_url_rule(
            "/login",
            endpoint="login",
            view_func=rate_limit(self._limiter)(self.login),
            methods=["POST"],
        )
        return bp
