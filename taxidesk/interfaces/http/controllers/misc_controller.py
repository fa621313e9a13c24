# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from taxidesk.infrastructure.spreadsheet import RESERVATIONS_SHEET, WorkbookStore
from taxidesk.shared.errors import StorageError
from taxidesk.shared.logging import logger


class MiscController:
    def __init__(self, *, store: WorkbookStore) -> None:
        self._store = store

    def as_blueprint(self, url_prefix: str = "/api") -> Blueprint:
        bp = Blueprint("misc", __name__, url_prefix=url_prefix)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self) -> tuple[Response, int]:
        status: dict[str, object] = {"ok": True}
        try:
            status["reservations"] = len(self._store.read_rows(RESERVATIONS_SHEET))
            status["store"] = "ok"
        except StorageError as exc:
            logger.error(f"health: store check failed: {exc}")
            status["ok"] = False
            status["store"] = "error"
        return jsonify(status), 200 if status["ok"] else 503
