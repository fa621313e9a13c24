# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import base64
import hashlib
import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from cryptography.fernet import Fernet, InvalidToken

from taxidesk.domain.users.entities import Role, TokenClaims
from taxidesk.domain.users.exceptions import InvalidTokenError, TokenExpiredError
from taxidesk.domain.users.repositories import TokenService

DEFAULT_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def derive_key(secret: str) -> bytes:
    """Fernet needs 32 url-safe base64 bytes; any configured secret maps onto one."""
    digest = hashlib.sha256(secret.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest)


class FernetTokenService(TokenService):
    """Stateless session tokens: authenticated, encrypted, time-bounded claims.

    The server keeps no session table. A token is valid when it decrypts under
    the current secret and its ``exp`` claim lies in the future, so changing the
    secret invalidates every outstanding token.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        if ttl <= timedelta(0):
            raise ValueError("token ttl must be positive")
        self._fernet = Fernet(derive_key(secret))
        self._ttl = ttl
        self._clock = clock

    def issue(self, username: str, role: Role) -> str:
        now = int(self._clock().timestamp())
        claims = {
            "sub": username,
            "role": Role(role).value,
            "iat": now,
            "exp": now + int(self._ttl.total_seconds()),
        }
        body = json.dumps(claims, separators=(",", ":")).encode("utf-8")
        return self._fernet.encrypt_at_time(body, now).decode("ascii")

    def verify(self, token: str) -> TokenClaims:
        if not token or not isinstance(token, str):
            raise InvalidTokenError("empty token")
        try:
            body = self._fernet.decrypt(token.encode("ascii"))
        except (InvalidToken, UnicodeEncodeError) as exc:
            raise InvalidTokenError("token signature check failed") from exc

        try:
            claims = json.loads(body)
            username = str(claims["sub"])
            role = Role(claims["role"])
            issued_at = int(claims["iat"])
            expires_at = int(claims["exp"])
        except (ValueError, KeyError, TypeError) as exc:
            raise InvalidTokenError("malformed token claims") from exc

        if self._clock().timestamp() >= expires_at:
            raise TokenExpiredError(f"token for {username} expired")

        return TokenClaims(
            username=username,
            role=role,
            issued_at=datetime.fromtimestamp(issued_at, UTC),
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )
