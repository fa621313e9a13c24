# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from taxidesk.domain.users.entities import Role
from taxidesk.domain.users.exceptions import InvalidCredentialsError
from taxidesk.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from taxidesk.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    token: str
    username: str
    role: Role


class LoginUserUseCase:
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
        self._dummy_hash: str | None = None

    def _burn_verify(self, password: str) -> None:
        # Unknown users still pay for one hash check.
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash("not-a-real-password")
        self._password_hasher.verify(password, self._dummy_hash)

    def execute(self, username: str, password: str) -> LoginResult:
        user = self._users.find_by_username(username)
        if user is None:
            self._burn_verify(password)
            logger.warning(f"auth.login: unknown user username='{username}'")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.warning(f"auth.login: wrong password username='{user.username}'")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.username, user.role)
        logger.info(f"auth.login: ok username='{user.username}' role={user.role.value}")
        return LoginResult(token=token, username=user.username, role=user.role)
