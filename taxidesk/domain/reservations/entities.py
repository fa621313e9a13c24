# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Reservation records as booked by administrators and read by drivers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from taxidesk.domain.exceptions import InvariantViolation

# Attribute -> wire name of the text fields that must not be blank.
_REQUIRED_TEXT = (
    ("owner", "username"),
    ("fecha", "fecha"),
    ("horario", "horario"),
    ("origen", "origen"),
    ("destino", "destino"),
    ("pasajero", "pasajero"),
    ("contacto", "contacto"),
)


class PaymentMethod(str, Enum):
    CASH = "Efectivo"
    DEBIT = "Tarjeta Débito"
    CREDIT = "Tarjeta Crédito"
    TRANSFER = "Transferencia"

    @classmethod
    def parse(cls, value: object) -> PaymentMethod:
        """Resolve a wire value or an English member name, ignoring case."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().casefold()
        for member in cls:
            if text in (member.value.casefold(), member.name.casefold()):
                return member
        raise InvariantViolation(
            f"unknown payment method {value!r}", field="medioPago"
        )


@dataclass(slots=True, frozen=True)
class Reservation:
    """A single booked ride. Immutable once appended to the store."""

    owner: str
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

    def __post_init__(self) -> None:
        for attr, wire_name in _REQUIRED_TEXT:
            value = getattr(self, attr)
            if not isinstance(value, str) or not value.strip():
                raise InvariantViolation("required field is empty", field=wire_name)
        if isinstance(self.num_pasajeros, bool) or int(self.num_pasajeros) != self.num_pasajeros:
            raise InvariantViolation("passenger count must be an integer", field="numPasajeros")
        if self.num_pasajeros < 1:
            raise InvariantViolation("passenger count must be >= 1", field="numPasajeros")
        if not math.isfinite(self.valor) or self.valor < 0:
            raise InvariantViolation("price must be >= 0", field="valor")
        object.__setattr__(self, "num_pasajeros", int(self.num_pasajeros))
        object.__setattr__(self, "valor", float(self.valor))
        object.__setattr__(self, "medio_pago", PaymentMethod.parse(self.medio_pago))
        if self.referencia is not None and not str(self.referencia).strip():
            object.__setattr__(self, "referencia", None)

    def to_dict(self) -> dict[str, Any]:
        """Wire shape; the owner travels as ``username`` like the sheet column."""
        return {
            "username": self.owner,
            "fecha": self.fecha,
            "horario": self.horario,
            "origen": self.origen,
            "destino": self.destino,
            "pasajero": self.pasajero,
            "contacto": self.contacto,
            "numPasajeros": self.num_pasajeros,
            "valor": self.valor,
            "medioPago": self.medio_pago.value,
            "referencia": self.referencia,
        }
