"""Tests for the spreadsheet writer and the export boundary."""

import logging
from io import BytesIO

import pytest
from openpyxl import load_workbook

from common.exceptions import ExportIOError, UnknownCategoryError
from common.export import HEADER, ExcelWriter, export_to_excel
from common.models import ExportRow
from common.services import ExpenseLedger


def _sheet_values(source):
    workbook = load_workbook(source)
    sheet = workbook.active
    return sheet.title, [tuple(row) for row in sheet.iter_rows(values_only=True)]


def test_writer_writes_header_and_rows(tmp_path) -> None:
    target = tmp_path / "out.xlsx"
    rows = [ExportRow("2024-01-01", "Food", 12.5), ExportRow("2024-01-02", "Rent", 500.0)]

    ExcelWriter().write(rows, target)

    title, values = _sheet_values(target)
    assert title == "Expenses"
    assert values == [HEADER, ("2024-01-01", "Food", 12.5), ("2024-01-02", "Rent", 500)]
    assert not (tmp_path / "out.xlsx.tmp").exists()


def test_writer_wraps_os_errors(tmp_path) -> None:
    target = tmp_path / "missing" / "out.xlsx"

    with pytest.raises(ExportIOError):
        ExcelWriter().write([], target)


def test_writer_to_bytes_produces_workbook() -> None:
    content = ExcelWriter(sheet_title="Food only").to_bytes([ExportRow("2024-01-01", "Food", 1.0)])

    title, values = _sheet_values(BytesIO(content))
    assert title == "Food only"
    assert values[1] == ("2024-01-01", "Food", 1)


def test_export_to_excel_writes_example_rows(example_ledger: ExpenseLedger, tmp_path, caplog) -> None:
    caplog.set_level(logging.INFO)
    target = tmp_path / "expenses.xlsx"

    assert export_to_excel(example_ledger, target) is True

    _, values = _sheet_values(target)
    assert values[0] == HEADER
    assert [row[1] for row in values[1:]] == ["Food", "Food", "Rent"]
    assert sum(row[2] for row in values[1:]) == pytest.approx(520.0)
    assert "Exported data to Excel file" in caplog.text


def test_export_to_excel_with_category_filter(example_ledger: ExpenseLedger, tmp_path) -> None:
    target = tmp_path / "rent.xlsx"

    assert export_to_excel(example_ledger, target, "Rent") is True

    _, values = _sheet_values(target)
    assert values == [HEADER, ("2024-01-01", "Rent", 500)]


def test_export_to_excel_logs_write_failure(example_ledger: ExpenseLedger, tmp_path, caplog) -> None:
    target = tmp_path / "missing" / "expenses.xlsx"

    assert export_to_excel(example_ledger, target) is False

    assert not target.exists()
    assert any(record.levelno == logging.ERROR for record in caplog.records)


def test_export_to_excel_unknown_category_propagates(example_ledger: ExpenseLedger, tmp_path) -> None:
    target = tmp_path / "x.xlsx"

    with pytest.raises(UnknownCategoryError):
        export_to_excel(example_ledger, target, "Yachts")

    assert not target.exists()


def test_writer_rejects_directory_destination(tmp_path) -> None:
    with pytest.raises(ExportIOError):
        ExcelWriter().write([], tmp_path)

    with pytest.raises(ExportIOError):
        ExcelWriter().write([], ".")


def test_writer_rejects_control_characters() -> None:
    with pytest.raises(ExportIOError):
        ExcelWriter().to_bytes([ExportRow("2024-01-01", "Food\x01", 1.0)])


def test_export_to_excel_reports_unstorable_category(tmp_path, caplog) -> None:
    ledger = ExpenseLedger(["Food\x01"])
    ledger.add_expense("Food\x01", 3.0, "2024-01-01")
    target = tmp_path / "x.xlsx"

    assert export_to_excel(ledger, target) is False

    assert not target.exists()
    assert any(record.levelno == logging.ERROR for record in caplog.records)
