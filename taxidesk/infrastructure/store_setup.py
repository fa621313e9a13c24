# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taxidesk.domain.users.entities import Role, User
from taxidesk.domain.users.repositories import PasswordHasher
from taxidesk.infrastructure.repositories.users.spreadsheet_user_repository import user_to_row
from taxidesk.infrastructure.spreadsheet import WorkbookStore
from taxidesk.shared.config import StoreConfig
from taxidesk.shared.logging import logger

ADMIN_USERNAME = "admin"
DRIVER_USERNAME = "taxista"


def seed_users(config: StoreConfig, hasher: PasswordHasher) -> list[User]:
    return [
        User(
            username=ADMIN_USERNAME,
            password_hash=hasher.hash(config.seed_admin_password),
            role=Role.ADMIN,
        ),
        User(
            username=DRIVER_USERNAME,
            password_hash=hasher.hash(config.seed_driver_password),
            role=Role.DRIVER,
        ),
    ]


def setup_store(config: StoreConfig, store: WorkbookStore, hasher: PasswordHasher) -> bool:
    """Create the workbook with the two seed accounts unless it already exists."""
    if store.exists() and not config.reset_on_start:
        return store.initialize((), reset=False)

    users = seed_users(config, hasher)
    created = store.initialize((user_to_row(u) for u in users), reset=config.reset_on_start)
    if created:
        logger.info(
            f"store_setup: seeded accounts {', '.join(u.username for u in users)}"
        )
    return created


__all__ = ["ADMIN_USERNAME", "DRIVER_USERNAME", "seed_users", "setup_store"]
