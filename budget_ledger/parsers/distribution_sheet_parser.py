"""Parser for bulk budget distribution sheets (CSV or XLSX).

Expected layout:
    Row 1:  Column headers
    Row 2+: One distribution per row

Required columns (matched ignoring case, spaces, ``_`` and ``-``):
    serialCode | upazilaId | upazilaName | economicCode | distributedBudget

Records emitted carry ``BudgetDistribution`` field names plus ``_row``, the
1-based line number in the file.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

import pandas as pd

from .base_parser import BaseParser, ParseResult

logger = logging.getLogger(__name__)

#: Sheet header → ``BudgetDistribution`` field.
REQUIRED_COLUMNS: dict[str, str] = {
    "serialCode": "serial_code",
    "upazilaId": "upazila_id",
    "upazilaName": "upazila_name",
    "economicCode": "economic_code",
    "distributedBudget": "distributed_budget",
}

CENT = Decimal("0.01")

#: Exclusive bound of the ``Numeric(15, 2)`` amount columns.
MAX_AMOUNT = Decimal("1e13")


class DistributionSheetParser(BaseParser):
    """Read distribution rows and validate each one.

    A header row missing any required column is a structural error and no
    records are produced.  Unknown columns are ignored with a warning.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._columns: dict[str, str] = {}

    def validate_structure(self, df: pd.DataFrame) -> list[str]:
        by_normalized = {self._normalize_header(c): c for c in df.columns}
        missing: list[str] = []
        for column in REQUIRED_COLUMNS:
            actual = by_normalized.get(self._normalize_header(column))
            if actual is None:
                missing.append(column)
            else:
                self._columns[column] = actual

        if missing:
            return [f"Missing required column(s): {', '.join(missing)}."]

        expected = {self._normalize_header(c) for c in REQUIRED_COLUMNS}
        for col in df.columns:
            if self._normalize_header(col) not in expected:
                self.result.warnings.append(f"Ignored unexpected column '{col}'.")
        return []

    def _parse_row(self, row: pd.Series, line: int) -> dict[str, Any] | None:
        values = {col: row[actual] for col, actual in self._columns.items()}
        record: dict[str, Any] = {"_row": line}
        problems: list[str] = []

        for column in ("serialCode", "upazilaId", "economicCode"):
            text = self._clean_str(values[column])
            if not text:
                problems.append(f"{column} is blank")
            record[REQUIRED_COLUMNS[column]] = text
        record["upazila_name"] = self._clean_str(values["upazilaName"]) or None

        amount = self._to_amount(values["distributedBudget"])
        if amount is None:
            problems.append("distributedBudget is not a number")
        elif amount <= 0:
            problems.append("distributedBudget must be greater than 0")
        elif amount >= MAX_AMOUNT:
            problems.append("distributedBudget is too large")
        elif amount != amount.quantize(CENT):
            problems.append("distributedBudget has more than two decimal places")
        else:
            amount = amount.quantize(CENT)
        record["distributed_budget"] = amount

        if problems:
            self.result.errors.append(f"Row {line}: {'; '.join(problems)}.")
            return None
        return record

    def parse(self) -> ParseResult:
        df = self._load_table()
        if not self.result.ok:
            return self.result

        structure_errors = self.validate_structure(df)
        if structure_errors:
            self.result.errors.extend(structure_errors)
            return self.result

        rows_read = 0
        for idx, row in df.iterrows():
            if self._is_empty_row(row):
                continue
            rows_read += 1
            # header occupies line 1
            record = self._parse_row(row, line=int(idx) + 2)
            if record is not None:
                self.result.records.append(record)

        self.result.metadata["rows_read"] = rows_read
        self.result.metadata["columns"] = [str(c) for c in df.columns]
        logger.debug("%s: %s", self.file_name, self.result.summary())
        return self.result
