"""Tests for DistributionSheetParser."""

from __future__ import annotations

import io
from decimal import Decimal

from openpyxl import Workbook

from budget_ledger.parsers import DistributionSheetParser

HEADER = "serialCode,upazilaId,upazilaName,economicCode,distributedBudget"


def _parse(text: str, file_name: str = "sheet.csv"):
    return DistributionSheetParser(text.encode("utf-8"), file_name=file_name).parse()


def test_valid_rows_become_records() -> None:
    result = _parse(f"{HEADER}\n001,27,Savar,3111101,\"1,500.50\"\n002,28,Dhamrai,3111101,200\n")

    assert result.ok
    assert result.metadata["rows_read"] == 2
    first = result.records[0]
    assert first["serial_code"] == "001"
    assert first["upazila_id"] == "27"
    assert first["distributed_budget"] == Decimal("1500.50")
    assert first["_row"] == 2


def test_headers_match_loosely() -> None:
    result = _parse("Serial Code,Upazila_ID,upazila name,ECONOMIC-CODE,Distributed Budget\nS1,1,A,E,5\n")

    assert result.ok
    assert result.records[0]["economic_code"] == "E"


def test_missing_column_is_structural_error() -> None:
    result = _parse("serialCode,upazilaId,upazilaName,economicCode\nS1,1,A,E\n")

    assert not result.ok
    assert result.records == []
    assert result.errors == ["Missing required column(s): distributedBudget."]


def test_unexpected_column_is_a_warning() -> None:
    result = _parse(f"{HEADER},remarks\nS1,1,A,E,5,hello\n")

    assert result.ok
    assert result.warnings == ["Ignored unexpected column 'remarks'."]


def test_bad_rows_are_reported_by_line() -> None:
    result = _parse(f"{HEADER}\nS1,1,A,E,5\n,1,A,E,abc\nS3,1,A,E,-2\n")

    assert not result.ok
    assert result.errors == [
        "Row 3: serialCode is blank; distributedBudget is not a number.",
        "Row 4: distributedBudget must be greater than 0.",
    ]
    assert [r["serial_code"] for r in result.records] == ["S1"]


def test_blank_rows_are_skipped() -> None:
    result = _parse(f"{HEADER}\nS1,1,A,E,5\n,,,,\n")

    assert result.ok
    assert result.metadata["rows_read"] == 1


def test_empty_file_has_no_header() -> None:
    result = _parse("")

    assert result.errors == ["The file has no header row."]


def test_xlsx_sheet_is_read_with_openpyxl() -> None:
    wb = Workbook()
    ws = wb.active
    ws.append(HEADER.split(","))
    ws.append(["0042", "27", "Savar", "3111101", 750])
    buffer = io.BytesIO()
    wb.save(buffer)

    result = DistributionSheetParser(buffer.getvalue(), file_name="sheet.xlsx").parse()

    assert result.ok, result.errors
    assert result.records[0]["serial_code"] == "0042"
    assert result.records[0]["distributed_budget"] == Decimal("750.00")


def test_amounts_are_exact_decimals() -> None:
    result = _parse(f"{HEADER}\nS1,1,A,E,0.1\nS2,1,A,E,0.2\nS3,1,A,E,1.500\n")

    amounts = [r["distributed_budget"] for r in result.records]

    assert amounts == [Decimal("0.10"), Decimal("0.20"), Decimal("1.50")]
    assert sum(amounts) == Decimal("1.80")


def test_sub_cent_and_oversized_amounts_are_row_errors() -> None:
    result = _parse(f"{HEADER}\nS1,1,A,E,0.004\nS2,1,A,E,10000000000000\nS3,1,A,E,nan\n")

    assert result.errors == [
        "Row 2: distributedBudget has more than two decimal places.",
        "Row 3: distributedBudget is too large.",
        "Row 4: distributedBudget is not a number.",
    ]


def test_summary_counts_rows_and_problems() -> None:
    result = _parse(f"{HEADER},extra\nS1,1,A,E,5,x\nS2,1,A,E,bad,y\n")

    assert result.summary() == "2 row(s) read, 1 valid, 1 error(s), 1 warning(s)"
