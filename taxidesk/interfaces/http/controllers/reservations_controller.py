# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import io

from flask import Blueprint, Response, jsonify, request, send_file
from pydantic import ValidationError

from taxidesk.application.use_cases.reservations.create_reservation import (
    CreateReservationUseCase,
)
from taxidesk.application.use_cases.reservations.export_store import ExportStoreUseCase
from taxidesk.application.use_cases.reservations.list_reservations import (
    ListReservationsUseCase,
)
from taxidesk.interfaces.http.auth import AccessControl, current_identity
from taxidesk.interfaces.http.dto.reservations import CreateReservationDTO
from taxidesk.shared.errors.validation import raise_validation_error

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXPORT_FILENAME = "taxi_data.xlsx"


class ReservationsController:
    def __init__(
        self,
        *,
        access: AccessControl,
        list_use_case: ListReservationsUseCase,
        create_use_case: CreateReservationUseCase,
        export_use_case: ExportStoreUseCase,
    ) -> None:
        self._access = access
        self._list_use_case = list_use_case
        self._create_use_case = create_use_case
        self._export_use_case = export_use_case

    def list_reservations(self) -> tuple[Response, int]:
        reservations = self._list_use_case.execute()
        return jsonify([r.to_dict() for r in reservations]), 200

    def create_reservation(self) -> tuple[Response, int]:
        identity = current_identity()
        try:
            dto = CreateReservationDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        reservation = self._create_use_case.execute(identity.username, dto.to_draft())
        return jsonify(reservation.to_dict()), 201

    def export_store(self) -> Response:
        data = self._export_use_case.execute()
        return send_file(
            io.BytesIO(data),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=EXPORT_FILENAME,
        )

    def as_blueprint(self, url_prefix: str = "/api") -> Blueprint:
        bp = Blueprint("reservations", __name__, url_prefix=url_prefix)
        bp.add_url_rule(
            "/reservas",
            endpoint="list",
            view_func=self._access.require()(self.list_reservations),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/reservas",
            endpoint="create",
            view_func=self._access.require(admin=True)(self.create_reservation),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/export-excel",
            endpoint="export",
            view_func=self._access.require(admin=True)(self.export_store),
            methods=["GET"],
        )
        return bp
