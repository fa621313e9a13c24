# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from taxidesk.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    # Same code and message for unknown user and wrong password.
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid username or password"


class InvalidTokenError(Exception):
    """Token is malformed, forged or signed with another secret."""


class TokenExpiredError(InvalidTokenError):
    pass
