"""Spreadsheet export for the expense tracker ledger."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Union

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from .exceptions import ExportIOError
from .models import ExportRow
from .services import ExpenseLedger

logger = logging.getLogger(__name__)

HEADER = ("Date", "Category", "Amount")


class ExcelWriter:
    """Writes export rows to an .xlsx workbook with a single sheet."""

    def __init__(self, sheet_title: str = "Expenses") -> None:
        self._sheet_title = sheet_title

    def build(self, rows: Iterable[ExportRow]) -> Workbook:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = self._sheet_title
        sheet.append(HEADER)
        for row in rows:
            try:
                sheet.append(row.as_tuple())
            except IllegalCharacterError as exc:
                raise ExportIOError(
                    f"Row for category {row.category!r} cannot be stored in a worksheet"
                ) from exc
        return workbook

    def write(self, rows: Iterable[ExportRow], path: Union[str, Path]) -> Path:
        path = Path(path)
        if not path.name or path.is_dir():
            raise ExportIOError(f"Export destination {path} is not a file path")
        workbook = self.build(rows)
        temp_path = path.with_name(path.name + ".tmp")
        try:
            with temp_path.open("wb") as handle:
                self._save(workbook, handle)
            # Replace is atomic on POSIX.
            temp_path.replace(path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise ExportIOError(f"Unable to write to {path}") from exc
        return path

    def to_bytes(self, rows: Iterable[ExportRow]) -> bytes:
        buffer = BytesIO()
        try:
            self._save(self.build(rows), buffer)
        except OSError as exc:
            raise ExportIOError("Unable to serialise workbook") from exc
        return buffer.getvalue()

    @staticmethod
    def _save(workbook: Workbook, handle: BinaryIO) -> None:
        try:
            workbook.save(handle)
        finally:
            workbook.close()


def export_to_excel(
    ledger: ExpenseLedger,
    path: Union[str, Path],
    category: Optional[str] = None,
    writer: Optional[ExcelWriter] = None,
    *,
    sort_dates: bool = False,
) -> bool:
    """Export ledger rows to ``path`` and report whether the file was written.

    An unknown category propagates as ``UnknownCategoryError``. Write failures
    are logged and reported through the return value.
    """
    rows = ledger.export_rows(category, sort_dates=sort_dates)
    writer = writer or ExcelWriter()
    try:
        written = writer.write(rows, path)
    except ExportIOError:
        logger.exception("Error writing Excel file %s", path)
        return False
    logger.info("Exported data to Excel file: %s", written)
    return True
