# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token access control for the HTTP API."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any

from flask import g, request

from taxidesk.domain.users.entities import Role
from taxidesk.domain.users.exceptions import InvalidTokenError, TokenExpiredError
from taxidesk.domain.users.repositories import TokenService
from taxidesk.shared.errors import ForbiddenError, UnauthenticatedError
from taxidesk.shared.logging import logger


@dataclass(slots=True, frozen=True)
class Identity:
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    if not header:
        logger.warning(f"No Authorization header on {request.method} {request.path}")
        raise UnauthenticatedError()

    scheme, _, token = header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        logger.warning(f"Malformed Authorization header on {request.method} {request.path}")
        raise UnauthenticatedError()
    return token


def current_identity() -> Identity:
    identity = getattr(g, "identity", None)
    if identity is None:
        raise UnauthenticatedError()
    return identity


class AccessControl:
    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    def authenticate(self) -> Identity:
        token = bearer_token()
        try:
            claims = self._tokens.verify(token)
        except TokenExpiredError:
            logger.info(f"Auth failed (token expired) on {request.method} {request.path}")
            raise UnauthenticatedError() from None
        except InvalidTokenError:
            logger.warning(f"Auth failed (invalid token) on {request.method} {request.path}")
            raise UnauthenticatedError() from None
        return Identity(username=claims.username, role=claims.role)

    def require(self, *, admin: bool = False) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            @wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                identity = self.authenticate()
                if admin and not identity.is_admin:
                    logger.warning(
                        f"Admin access denied: user {identity.username} on {request.method} {request.path}"
                    )
                    raise ForbiddenError()

                g.identity = identity
                logger.debug(f"Auth OK: user={identity.username} {request.method} {request.path}")
                return func(*args, **kwargs)

            return wrapper

        return decorator


__all__ = ["AccessControl", "Identity", "bearer_token", "current_identity"]
