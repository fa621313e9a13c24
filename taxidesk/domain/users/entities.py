# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from taxidesk.domain.exceptions import InvariantViolation


class Role(str, Enum):
    ADMIN = "admin"
    DRIVER = "taxista"

    @classmethod
    def parse(cls, value: object) -> Role:
        """Accept the stored value; unknown or empty roles fall back to driver."""
        text = str(value or "").strip().lower()
        if text in ("admin", "administrator"):
            return cls.ADMIN
        return cls.DRIVER


@dataclass(slots=True, frozen=True)
class User:
    """Account row from the ``usuarios`` sheet; the hash is never sent to clients."""

    username: str
    password_hash: str
    role: Role = Role.DRIVER

    def __post_init__(self) -> None:
        if not self.username or not self.username.strip():
            raise InvariantViolation("username must not be empty", field="username")
        if not self.password_hash:
            raise InvariantViolation("password hash must not be empty", field="password")

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def matches(self, username: str) -> bool:
        return self.username.casefold() == username.strip().casefold()


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Identity carried by a verified session token."""

    username: str
    role: Role
    issued_at: datetime
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
