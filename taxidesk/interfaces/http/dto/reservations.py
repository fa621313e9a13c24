from __future__ import annotations

import re
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taxidesk.application.use_cases.reservations.create_reservation import ReservationDraft
from taxidesk.domain.exceptions import InvariantViolation
from taxidesk.domain.reservations.entities import PaymentMethod

# Characters a spreadsheet cell cannot hold.
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


class CreateReservationDTO(BaseModel):
    """Body of ``POST /reservas``. Any owner sent by the client is ignored."""

    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
        validate_by_name=True,
        validate_by_alias=True,
    )

    fecha: date
    horario: str = Field(min_length=1, max_length=32)
    origen: str = Field(min_length=1, max_length=255)
    destino: str = Field(min_length=1, max_length=255)
    pasajero: str = Field(min_length=1, max_length=128)
    contacto: str = Field(min_length=1, max_length=64)
    num_pasajeros: int = Field(alias="numPasajeros", ge=1)
    valor: float = Field(ge=0, allow_inf_nan=False)
    medio_pago: PaymentMethod = Field(alias="medioPago")
    referencia: str | None = Field(None, max_length=255)

    @field_validator("horario", "origen", "destino", "pasajero", "contacto", "referencia")
    @classmethod
    def _printable(cls, value: str | None) -> str | None:
        if value is not None and _CONTROL_CHARS.search(value):
            raise ValueError("Text must not contain control characters")
        return value

    @field_validator("medio_pago", mode="before")
    @classmethod
    def _parse_payment(cls, value: object) -> PaymentMethod:
        try:
            return PaymentMethod.parse(value)
        except InvariantViolation as exc:
            allowed = ", ".join(m.value for m in PaymentMethod)
            raise ValueError(f"Payment method must be one of: {allowed}") from exc

    @field_validator("referencia", mode="before")
    @classmethod
    def _blank_reference(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_draft(self) -> ReservationDraft:
        return ReservationDraft(
            fecha=self.fecha.isoformat(),
            horario=self.horario,
            origen=self.origen,
            destino=self.destino,
            pasajero=self.pasajero,
            contacto=self.contacto,
            num_pasajeros=self.num_pasajeros,
            valor=self.valor,
            medio_pago=self.medio_pago,
            referencia=self.referencia,
        )
