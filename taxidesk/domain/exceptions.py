# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations


class InvariantViolation(Exception):
    """An entity was given a value its rules do not allow.

    ``field`` is the name the value carries on the wire and in the workbook
    (``numPasajeros``, ``medioPago``, ``username``), so it can be reported to
    clients as is.
    """

    def __init__(self, reason: str, *, field: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason
