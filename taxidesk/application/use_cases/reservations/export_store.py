# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taxidesk.domain.reservations.repositories import StoreExporter
from taxidesk.shared.logging import logger


class ExportStoreUseCase:
    def __init__(self, *, exporter: StoreExporter) -> None:
        self._exporter = exporter

    def execute(self) -> bytes:
        data = self._exporter.snapshot()
        logger.info(f"reservations.export: {len(data)} bytes")
        return data
