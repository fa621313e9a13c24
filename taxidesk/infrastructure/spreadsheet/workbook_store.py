# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Spreadsheet-backed persistence.

The whole data set lives in one ``.xlsx`` workbook with two sheets, ``usuarios``
and ``reservas``, each starting with a header row. Every read loads the full
workbook and every write rewrites it, so :class:`WorkbookStore` funnels all
access through a single re-entrant lock. Writes go to a temporary file that is
swapped in with ``os.replace``; a failed write leaves the previous file intact.
"""

from __future__ import annotations

import io
import threading
import zipfile
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError, InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from taxidesk.shared.errors import StorageError
from taxidesk.shared.logging import logger
from taxidesk.utils.fs import save_atomic

USERS_SHEET = "usuarios"
RESERVATIONS_SHEET = "reservas"

USER_COLUMNS: tuple[tuple[str, int], ...] = (
    ("username", 20),
    ("password", 30),
    ("role", 15),
)

RESERVATION_COLUMNS: tuple[tuple[str, int], ...] = (
    ("username", 15),
    ("fecha", 12),
    ("horario", 10),
    ("origen", 25),
    ("destino", 25),
    ("pasajero", 20),
    ("contacto", 15),
    ("numPasajeros", 12),
    ("valor", 10),
    ("medioPago", 15),
    ("referencia", 20),
)

_LAYOUT: dict[str, tuple[tuple[str, int], ...]] = {
    USERS_SHEET: USER_COLUMNS,
    RESERVATIONS_SHEET: RESERVATION_COLUMNS,
}

_READ_ERRORS = (OSError, InvalidFileException, zipfile.BadZipFile, KeyError, ValueError)

Row = dict[str, Any]


def _columns(sheet: str) -> list[str]:
    try:
        return [name for name, _ in _LAYOUT[sheet]]
    except KeyError:
        raise StorageError(f"unknown sheet {sheet!r}") from None


class WorkbookStore:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def initialize(self, seed_users: Iterable[Mapping[str, Any]], *, reset: bool = False) -> bool:
        """Create the workbook if absent. Returns True when a new file was written."""
        with self._lock:
            if reset and self._path.exists():
                logger.warning(f"store: deleting existing workbook {self._path} (reset requested)")
                try:
                    self._path.unlink()
                except OSError as exc:
                    raise StorageError(f"cannot delete workbook {self._path}: {exc}") from exc

            if self._path.exists():
                wb = self._load()
                for sheet in _LAYOUT:
                    self._sheet(wb, sheet)
                logger.info(f"store: using existing workbook {self._path}")
                return False

            wb = Workbook()
            wb.remove(wb.active)
            for sheet, layout in _LAYOUT.items():
                ws = wb.create_sheet(sheet)
                ws.append([name for name, _ in layout])
                for idx, (_, width) in enumerate(layout, start=1):
                    ws.column_dimensions[get_column_letter(idx)].width = width

            users = wb[USERS_SHEET]
            seeded = 0
            for row in seed_users:
                self._append(users, USERS_SHEET, row)
                seeded += 1

            self._save(wb)
            logger.info(f"store: created workbook {self._path} with {seeded} seed users")
            return True

    def read_rows(self, sheet: str) -> list[Row]:
        """Every data row of ``sheet`` in file order, header excluded."""
        columns = _columns(sheet)
        with self._lock:
            wb = self._load()
            ws = self._sheet(wb, sheet)
            return self._rows(ws, columns)

    def append_row(
        self,
        sheet: str,
        row: Mapping[str, Any],
        *,
        check: Callable[[Sequence[Row]], None] | None = None,
    ) -> Row:
        """Append one row as a single read-modify-write.

        ``check`` runs under the lock against the current rows and may raise to
        abort the write.
        """
        columns = _columns(sheet)
        with self._lock:
            wb = self._load()
            ws = self._sheet(wb, sheet)
            if check is not None:
                check(self._rows(ws, columns))
            self._append(ws, sheet, row)
            self._save(wb)
            logger.debug(f"store: appended row to {sheet} (rows={ws.max_row - 1})")
        return {name: row.get(name) for name in columns}

    def snapshot(self) -> bytes:
        """Raw bytes of the workbook as currently committed."""
        with self._lock:
            try:
                return self._path.read_bytes()
            except OSError as exc:
                raise StorageError(f"cannot read workbook {self._path}: {exc}") from exc

    def _load(self) -> Workbook:
        try:
            return load_workbook(self._path)
        except _READ_ERRORS as exc:
            raise StorageError(f"cannot read workbook {self._path}: {exc}") from exc

    def _save(self, wb: Workbook) -> None:
        buf = io.BytesIO()
        try:
            wb.save(buf)
            save_atomic(self._path, buf.getvalue())
        except OSError as exc:
            raise StorageError(f"cannot write workbook {self._path}: {exc}") from exc

    def _sheet(self, wb: Workbook, sheet: str) -> Worksheet:
        if sheet not in wb.sheetnames:
            raise StorageError(f"workbook {self._path} has no sheet {sheet!r}")
        return wb[sheet]

    @staticmethod
    def _rows(ws: Worksheet, columns: list[str]) -> list[Row]:
        rows: list[Row] = []
        for values in ws.iter_rows(min_row=2, max_col=len(columns), values_only=True):
            if all(v is None or v == "" for v in values):
                continue
            padded = list(values) + [None] * (len(columns) - len(values))
            rows.append(dict(zip(columns, padded)))
        return rows

    @staticmethod
    def _append(ws: Worksheet, sheet: str, row: Mapping[str, Any]) -> None:
        try:
            ws.append([row.get(name) for name in _columns(sheet)])
        except IllegalCharacterError as exc:
            raise StorageError(f"row for {sheet!r} holds a character a cell cannot store") from exc
        # Values typed by users must never be evaluated as formulas.
        for cell in ws[ws.max_row]:
            if cell.data_type == "f":
                cell.data_type = "s"
