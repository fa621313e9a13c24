# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Reservation


class ReservationRepository(Protocol):
    def list_all(self) -> Sequence[Reservation]: ...
    def append(self, reservation: Reservation) -> Reservation: ...


class StoreExporter(Protocol):
    def snapshot(self) -> bytes: ...
