# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation
from .reservations import PaymentMethod, Reservation
from .users import Role, TokenClaims, User

__all__ = [
    "InvariantViolation",
    "PaymentMethod",
    "Reservation",
    "Role",
    "TokenClaims",
    "User",
]
