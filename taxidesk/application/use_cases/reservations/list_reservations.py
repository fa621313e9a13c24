# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taxidesk.domain.reservations.entities import Reservation
from taxidesk.domain.reservations.repositories import ReservationRepository


class ListReservationsUseCase:
    """Full reservation list in append order; drivers and admins see the same rows."""

    def __init__(self, *, reservations: ReservationRepository) -> None:
        self._reservations = reservations

    def execute(self) -> list[Reservation]:
        return list(self._reservations.list_all())
