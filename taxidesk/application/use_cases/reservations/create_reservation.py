# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from taxidesk.domain.exceptions import InvariantViolation
from taxidesk.domain.reservations.entities import PaymentMethod, Reservation
from taxidesk.domain.reservations.repositories import ReservationRepository
from taxidesk.shared.errors import ValidationError
from taxidesk.shared.logging import logger


@dataclass(slots=True, frozen=True)
class ReservationDraft:
    """Reservation fields as submitted, before an owner is attached."""

    fecha: str
    horario: str
    origen: str
    destino: str
    pasajero: str
    contacto: str
    num_pasajeros: int
    valor: float
    medio_pago: PaymentMethod
    referencia: str | None = None


class CreateReservationUseCase:
    def __init__(self, *, reservations: ReservationRepository) -> None:
        self._reservations = reservations

    def execute(self, owner: str, draft: ReservationDraft) -> Reservation:
        try:
            reservation = Reservation(
                owner=owner,
                fecha=draft.fecha,
                horario=draft.horario,
                origen=draft.origen,
                destino=draft.destino,
                pasajero=draft.pasajero,
                contacto=draft.contacto,
                num_pasajeros=draft.num_pasajeros,
                valor=draft.valor,
                medio_pago=draft.medio_pago,
                referencia=draft.referencia,
            )
        except InvariantViolation as exc:
            raise ValidationError(
                message=f"Invalid fields: {exc.field}",
                context={
                    "fields": [exc.field],
                    "errors": [{"field": exc.field, "message": exc.reason}],
                },
            ) from exc

        stored = self._reservations.append(reservation)
        logger.info(
            f"reservations.create: ok owner='{owner}' fecha={stored.fecha} horario={stored.horario}"
        )
        return stored
