# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .workbook_store import (
    RESERVATION_COLUMNS,
    RESERVATIONS_SHEET,
    USER_COLUMNS,
    USERS_SHEET,
    WorkbookStore,
)

__all__ = [
    "RESERVATION_COLUMNS",
    "RESERVATIONS_SHEET",
    "USER_COLUMNS",
    "USERS_SHEET",
    "WorkbookStore",
]
