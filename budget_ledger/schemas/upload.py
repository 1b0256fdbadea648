"""
Pydantic v2 schemas for the distribution sheet import.

Covers:
- Upload result for ``POST /uploadExcel``.
- Import log rows for ``GET /uploadExcel/history``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from budget_ledger.schemas.common import CamelModel


class ImportResult(CamelModel):
    """Summary returned after a sheet was imported."""

    file_name: str
    rows_read: int = Field(..., ge=0)
    inserted: int = Field(..., ge=0)
    duplicates: int = Field(..., ge=0)
    warnings: list[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "fileName": "distributions_2026.csv",
                "rowsRead": 120,
                "inserted": 117,
                "duplicates": 3,
                "warnings": ["Ignored unexpected column 'remarks'."],
            }
        }
    )


class ImportRecordResponse(CamelModel):
    id: int
    file_name: str
    uploaded_at: datetime
    uploaded_by: str | None = None
    rows_read: int
    rows_inserted: int
    rows_duplicate: int
    status: str
    errors: list[str] = Field(default_factory=list)
