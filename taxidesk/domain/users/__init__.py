# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Role, TokenClaims, User
from .exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    UserAlreadyExistsError,
)
from .repositories import PasswordHasher, TokenService, UserRepository

__all__ = [
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PasswordHasher",
    "Role",
    "TokenClaims",
    "TokenExpiredError",
    "TokenService",
    "User",
    "UserAlreadyExistsError",
    "UserRepository",
]
