# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from taxidesk.domain.exceptions import InvariantViolation
from taxidesk.domain.users.entities import Role, User
from taxidesk.domain.users.exceptions import UserAlreadyExistsError
from taxidesk.domain.users.repositories import UserRepository
from taxidesk.infrastructure.spreadsheet import USERS_SHEET, WorkbookStore
from taxidesk.shared.errors import StorageError


def user_to_row(user: User) -> dict[str, Any]:
    return {
        "username": user.username,
        "password": user.password_hash,
        "role": user.role.value,
    }


def _user_from_row(row: Mapping[str, Any]) -> User:
    try:
        return User(
            username=str(row.get("username") or "").strip(),
            password_hash=str(row.get("password") or ""),
            role=Role.parse(row.get("role")),
        )
    except InvariantViolation as exc:
        raise StorageError(f"corrupt user row: {exc}") from exc


class SpreadsheetUserRepository(UserRepository):
    def __init__(self, store: WorkbookStore) -> None:
        self._store = store

    def find_by_username(self, username: str) -> User | None:
        if not username or not username.strip():
            return None
        for row in self._store.read_rows(USERS_SHEET):
            user = _user_from_row(row)
            if user.matches(username):
                return user
        return None

    def add(self, user: User) -> User:
        def _unique(rows: Sequence[Mapping[str, Any]]) -> None:
            for row in rows:
                if user.matches(str(row.get("username") or "")):
                    raise UserAlreadyExistsError(context={"username": user.username})

        self._store.append_row(USERS_SHEET, user_to_row(user), check=_unique)
        return user
