# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from typing import Any

from taxidesk.domain.exceptions import InvariantViolation
from taxidesk.domain.reservations.entities import Reservation
from taxidesk.domain.reservations.repositories import ReservationRepository
from taxidesk.infrastructure.spreadsheet import RESERVATIONS_SHEET, WorkbookStore
from taxidesk.shared.errors import StorageError


def _text(value: Any) -> str:
    # Cells edited by hand in a spreadsheet app come back as dates/times.
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if value is None:
        return ""
    return str(value).strip()


def reservation_to_row(reservation: Reservation) -> dict[str, Any]:
    return {
        "username": reservation.owner,
        "fecha": reservation.fecha,
        "horario": reservation.horario,
        "origen": reservation.origen,
        "destino": reservation.destino,
        "pasajero": reservation.pasajero,
        "contacto": reservation.contacto,
        "numPasajeros": reservation.num_pasajeros,
        "valor": reservation.valor,
        "medioPago": reservation.medio_pago.value,
        "referencia": reservation.referencia,
    }


def reservation_from_row(row: Mapping[str, Any]) -> Reservation:
    try:
        return Reservation(
            owner=_text(row.get("username")),
            fecha=_text(row.get("fecha")),
            horario=_text(row.get("horario")),
            origen=_text(row.get("origen")),
            destino=_text(row.get("destino")),
            pasajero=_text(row.get("pasajero")),
            contacto=_text(row.get("contacto")),
            num_pasajeros=int(row.get("numPasajeros")),  # type: ignore[arg-type]
            valor=float(row.get("valor")),  # type: ignore[arg-type]
            medio_pago=row.get("medioPago"),  # type: ignore[arg-type]
            referencia=_text(row.get("referencia")) or None,
        )
    except (InvariantViolation, TypeError, ValueError) as exc:
        raise StorageError(f"corrupt reservation row: {exc}") from exc


class SpreadsheetReservationRepository(ReservationRepository):
    def __init__(self, store: WorkbookStore) -> None:
        self._store = store

    def list_all(self) -> Sequence[Reservation]:
        return [reservation_from_row(row) for row in self._store.read_rows(RESERVATIONS_SHEET)]

    def append(self, reservation: Reservation) -> Reservation:
        self._store.append_row(RESERVATIONS_SHEET, reservation_to_row(reservation))
        return reservation
