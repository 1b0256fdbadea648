"""
Bulk import service layer.

Handles distribution sheet uploads end-to-end:

1. Parse the sheet with ``DistributionSheetParser``.
2. Drop rows whose ``serial_code`` was already imported (or repeats earlier
   in the same file).
3. Check every referenced economic code exists and can absorb the sum of its
   new rows.
4. Reserve the budget per code and insert all new rows in one transaction.
5. Write an ``ImportRecord`` row describing the attempt.

Any failure in steps 1–4 rejects the whole file; nothing is inserted.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from budget_ledger.models.budget_distribution import BudgetDistribution
from budget_ledger.models.economic_code import EconomicCode
from budget_ledger.models.import_record import ImportRecord
from budget_ledger.parsers import DistributionSheetParser
from budget_ledger.schemas.upload import ImportRecordResponse, ImportResult
from budget_ledger.services import economic_code_service

logger = logging.getLogger(__name__)

#: Error messages echoed back to the client are capped at this many.
_MAX_REPORTED_ERRORS = 10


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_import_record(
    db: Session,
    *,
    file_name: str,
    uploaded_by: str | None,
    rows_read: int,
    rows_inserted: int,
    rows_duplicate: int,
    status_label: str,
    errors: list[str] | None = None,
) -> None:
    """Add an ``ImportRecord`` row and commit it."""
    db.add(
        ImportRecord(
            file_name=file_name,
            uploaded_by=uploaded_by,
            rows_read=rows_read,
            rows_inserted=rows_inserted,
            rows_duplicate=rows_duplicate,
            status=status_label,
            errors_json=json.dumps(errors, ensure_ascii=False) if errors else None,
        )
    )
    db.commit()


def _reject(
    db: Session,
    errors: list[str],
    *,
    file_name: str,
    uploaded_by: str | None,
    rows_read: int,
    rows_duplicate: int = 0,
) -> HTTPException:
    """Log a failed import and build the 400 to raise."""
    _write_import_record(
        db,
        file_name=file_name,
        uploaded_by=uploaded_by,
        rows_read=rows_read,
        rows_inserted=0,
        rows_duplicate=rows_duplicate,
        status_label="FAILED",
        errors=errors,
    )
    shown = errors[:_MAX_REPORTED_ERRORS]
    if len(errors) > len(shown):
        shown.append(f"... and {len(errors) - len(shown)} more error(s).")
    logger.warning("import '%s' rejected: %d error(s)", file_name, len(errors))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=" ".join(shown))


def _split_duplicates(
    db: Session, records: list[dict[str, Any]]
) -> tuple[list[dict[str, Any]], int]:
    """Separate rows with unseen serial codes from already-imported ones."""
    serials = sorted({r["serial_code"] for r in records})
    stored = (
        db.query(BudgetDistribution.serial_code)
        .filter(BudgetDistribution.serial_code.in_(serials))
        .all()
    )
    seen: set[str] = {row.serial_code for row in stored}
    fresh: list[dict[str, Any]] = []
    duplicates = 0
    for rec in records:
        if rec["serial_code"] in seen:
            duplicates += 1
            continue
        seen.add(rec["serial_code"])
        fresh.append(rec)
    return fresh, duplicates


def _check_budgets(
    db: Session, totals: dict[str, Decimal]
) -> tuple[dict[str, EconomicCode], list[str]]:
    """Verify each code exists, is active, and can absorb its new total."""
    codes = {
        c.economic_code: c
        for c in db.query(EconomicCode)
        .filter(EconomicCode.economic_code.in_(list(totals)), EconomicCode.active.is_(True))
        .all()
    }
    errors: list[str] = []
    for code, total in totals.items():
        ec = codes.get(code)
        if ec is None:
            errors.append(f"Economic Code '{code}' not found.")
            continue
        remaining = economic_code_service.remaining_of(ec)
        if total > remaining:
            errors.append(
                f"Economic Code '{code}': rows total {total:.2f} exceeds "
                f"remaining budget {remaining:.2f}."
            )
    return codes, errors


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------


def import_distribution_sheet(
    db: Session,
    raw: bytes,
    file_name: str,
    uploaded_by: str | None = None,
) -> ImportResult:
    """Import a distribution sheet; all new rows are inserted or none are.

    Args:
        db: Active SQLAlchemy session.
        raw: File contents.
        file_name: Original filename; ``.xlsx`` selects the Excel reader.
        uploaded_by: Opaque user identifier recorded in the import log.

    Returns:
        An ``ImportResult`` with inserted and duplicate counts.

    Raises:
        HTTPException 400: Empty file, missing columns, invalid rows, unknown
            economic codes, or insufficient remaining budget.
        HTTPException 409: Every row had already been imported.
    """
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The uploaded file is empty.",
        )

    result = DistributionSheetParser(raw, file_name=file_name).parse()
    rows_read = int(result.metadata.get("rows_read", 0))
    logger.info("import '%s': %s", file_name, result.summary())

    if not result.ok:
        raise _reject(
            db, result.errors, file_name=file_name, uploaded_by=uploaded_by, rows_read=rows_read
        )
    if not result.records:
        raise _reject(
            db, ["The file contains no data rows."],
            file_name=file_name, uploaded_by=uploaded_by, rows_read=0,
        )

    fresh, duplicates = _split_duplicates(db, result.records)

    if not fresh:
        _write_import_record(
            db,
            file_name=file_name,
            uploaded_by=uploaded_by,
            rows_read=rows_read,
            rows_inserted=0,
            rows_duplicate=duplicates,
            status_label="DUPLICATE",
        )
        logger.info("import '%s': all %d rows already imported", file_name, duplicates)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error": f"All {duplicates} row(s) were already imported.",
                "inserted": 0,
                "duplicates": duplicates,
            },
        )

    totals: dict[str, Decimal] = {}
    for rec in fresh:
        code = rec["economic_code"]
        totals[code] = totals.get(code, Decimal(0)) + rec["distributed_budget"]

    codes, budget_errors = _check_budgets(db, totals)
    if budget_errors:
        raise _reject(
            db, budget_errors, file_name=file_name, uploaded_by=uploaded_by,
            rows_read=rows_read, rows_duplicate=duplicates,
        )

    try:
        for code, total in totals.items():
            if not economic_code_service.reserve_budget(db, codes[code].id, total):
                raise ValueError(
                    f"Economic Code '{code}': remaining budget changed during import."
                )
        db.add_all(
            BudgetDistribution(
                serial_code=rec["serial_code"],
                upazila_id=rec["upazila_id"],
                upazila_name=rec["upazila_name"],
                economic_code=rec["economic_code"],
                distributed_budget=rec["distributed_budget"],
                expense_budget=0,
            )
            for rec in fresh
        )
        db.flush()
    except ValueError as exc:
        db.rollback()
        raise _reject(
            db, [str(exc)], file_name=file_name, uploaded_by=uploaded_by,
            rows_read=rows_read, rows_duplicate=duplicates,
        ) from exc
    except IntegrityError as exc:
        db.rollback()
        raise _reject(
            db, ["Serial codes collided with a concurrent import."],
            file_name=file_name, uploaded_by=uploaded_by,
            rows_read=rows_read, rows_duplicate=duplicates,
        ) from exc

    # commits the distributions together with the log row
    _write_import_record(
        db,
        file_name=file_name,
        uploaded_by=uploaded_by,
        rows_read=rows_read,
        rows_inserted=len(fresh),
        rows_duplicate=duplicates,
        status_label="SUCCESS",
    )
    logger.info(
        "import '%s': %d inserted, %d duplicates", file_name, len(fresh), duplicates
    )
    return ImportResult(
        file_name=file_name,
        rows_read=rows_read,
        inserted=len(fresh),
        duplicates=duplicates,
        warnings=result.warnings,
    )


def list_import_records(db: Session) -> list[ImportRecordResponse]:
    records = db.query(ImportRecord).order_by(ImportRecord.id.desc()).all()
    return [
        ImportRecordResponse(
            id=r.id,
            file_name=r.file_name,
            uploaded_at=r.uploaded_at,
            uploaded_by=r.uploaded_by,
            rows_read=r.rows_read,
            rows_inserted=r.rows_inserted,
            rows_duplicate=r.rows_duplicate,
            status=r.status,
            errors=json.loads(r.errors_json) if r.errors_json else [],
        )
        for r in records
    ]
