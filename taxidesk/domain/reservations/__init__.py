# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import PaymentMethod, Reservation
from .repositories import ReservationRepository, StoreExporter

__all__ = ["PaymentMethod", "Reservation", "ReservationRepository", "StoreExporter"]
