"""Abstract base class for uploaded sheet parsers.

Provides shared infrastructure for loading CSV and Excel sheets into
DataFrames and normalising cell values before format-specific subclasses
do their domain logic.
"""

from __future__ import annotations

import io
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, BinaryIO

import pandas as pd

logger = logging.getLogger(__name__)

#: File suffixes read with ``pd.read_excel``; everything else is read as CSV.
EXCEL_SUFFIXES: frozenset[str] = frozenset({".xlsx", ".xlsm"})


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass
class ParseResult:
    """Container returned by every parser after processing a sheet.

    Attributes:
        records: List of dicts ready for insertion.  Each dict key matches a
            model field name; keys starting with ``_`` are parser-internal.
        errors: Fatal row-level or structural problems.
        warnings: Non-fatal oddities (row or column was kept or ignored).
        metadata: Facts about the file itself (rows read, columns …).
    """

    records: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True when no fatal errors were collected."""
        return len(self.errors) == 0

    def summary(self) -> str:
        rows = self.metadata.get("rows_read", 0)
        return (
            f"{rows} row(s) read, {len(self.records)} valid, "
            f"{len(self.errors)} error(s), {len(self.warnings)} warning(s)"
        )


# ---------------------------------------------------------------------------
# Base parser
# ---------------------------------------------------------------------------


class BaseParser(ABC):
    """Abstract base for sheet parsers.

    Subclasses must implement:
        * ``validate_structure(df)`` — check expected columns.
        * ``parse()``               — extract domain records.

    The constructor accepts a file path string, raw bytes, or an open
    binary-mode file object so it works both from the filesystem and from
    FastAPI ``UploadFile.read()``.

    Attributes:
        file_name: Name used to decide between CSV and Excel loading.
        raw_bytes: Raw bytes of the file, kept for re-parsing.
        result: Accumulated ``ParseResult`` (populated during ``parse()``).
    """

    def __init__(
        self,
        file_path_or_bytes: str | bytes | BinaryIO,
        file_name: str | None = None,
    ) -> None:
        if file_name is None:
            file_name = file_path_or_bytes if isinstance(file_path_or_bytes, str) else "upload.csv"
        self.file_name: str = file_name
        self.raw_bytes: bytes = self._read_source(file_path_or_bytes)
        self.result: ParseResult = ParseResult()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _read_source(source: str | bytes | BinaryIO) -> bytes:
        """Normalise any input type to raw bytes."""
        if isinstance(source, bytes):
            return source
        if isinstance(source, str):
            return Path(source).read_bytes()
        # File-like object (e.g. SpooledTemporaryFile from FastAPI)
        data = source.read()
        return data if isinstance(data, bytes) else data.encode()

    @property
    def is_excel(self) -> bool:
        return Path(self.file_name).suffix.lower() in EXCEL_SUFFIXES

    # ------------------------------------------------------------------
    # Sheet loading
    # ------------------------------------------------------------------

    def _load_table(self) -> pd.DataFrame:
        """Load the first sheet (or the CSV) with the first row as header.

        Every cell is read as a string so that identifiers such as serial
        codes keep their leading zeros; callers cast numeric columns.
        A file that cannot be read yields an empty DataFrame and an error in
        ``self.result``.
        """
        buffer = io.BytesIO(self.raw_bytes)
        try:
            if self.is_excel:
                df = pd.read_excel(buffer, sheet_name=0, header=0, dtype=str, engine="openpyxl")
            else:
                df = pd.read_csv(
                    buffer,
                    dtype=str,
                    keep_default_na=False,
                    skipinitialspace=True,
                    encoding="utf-8-sig",
                )
        except pd.errors.EmptyDataError:
            self.result.errors.append("The file has no header row.")
            return pd.DataFrame()
        except Exception as exc:
            msg = f"Could not read '{self.file_name}': {exc}"
            logger.error(msg)
            self.result.errors.append(msg)
            return pd.DataFrame()
        return df

    # ------------------------------------------------------------------
    # Value normalisation helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _clean_str(value: Any) -> str:
        """Return a stripped string, converting NaN/None to empty string."""
        if value is None:
            return ""
        if isinstance(value, float) and pd.isna(value):
            return ""
        return str(value).strip()

    @staticmethod
    def _to_amount(value: Any) -> Decimal | None:
        """Parse a cell value to an exact ``Decimal``, stripping formatting artefacts.

        Handles thousands separators (commas), spaces and currency marks.
        Returns ``None`` for blanks, unparseable text, NaN and infinities.
        """
        if value is None:
            return None
        if isinstance(value, float) and pd.isna(value):
            return None
        cleaned = re.sub(r"[,\s]", "", str(value).strip().lstrip("৳Tk$ "))
        if not cleaned or cleaned in ("-", "—"):
            return None
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None

    @staticmethod
    def _normalize_header(name: Any) -> str:
        """Lower-case a header and drop separators: ``Serial Code`` → ``serialcode``."""
        return re.sub(r"[^a-z0-9]", "", str(name).lower())

    @staticmethod
    def _is_empty_row(row: pd.Series) -> bool:
        """True when every cell in the row is blank."""
        return all(not BaseParser._clean_str(val) for val in row)

    # ------------------------------------------------------------------
    # Abstract interface
    # ------------------------------------------------------------------

    @abstractmethod
    def validate_structure(self, df: pd.DataFrame) -> list[str]:
        """Verify that the DataFrame has the required columns.

        Returns:
            List of error messages.  Empty list means structure is valid.
        """

    @abstractmethod
    def parse(self) -> ParseResult:
        """Execute the full parsing pipeline and return a ``ParseResult``."""
