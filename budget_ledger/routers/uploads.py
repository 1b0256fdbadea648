"""
Bulk import router.

Endpoints
---------
POST /uploadExcel          — Import a CSV or XLSX distribution sheet.
GET  /uploadExcel/history  — Past import attempts, most recent first.

The sheet must carry the columns ``serialCode``, ``upazilaId``,
``upazilaName``, ``economicCode`` and ``distributedBudget``.  Rows whose
serial code was imported before are skipped and counted as duplicates.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from budget_ledger.database import get_db
from budget_ledger.schemas.upload import ImportRecordResponse, ImportResult
from budget_ledger.services import upload_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploadExcel", tags=["Import"])

_ALLOWED_SUFFIXES: tuple[str, ...] = (".csv", ".xlsx", ".xlsm")


@router.post(
    "",
    response_model=ImportResult,
    summary="Import distribution sheet",
    description=(
        "Imports every new row of the uploaded sheet as a budget distribution, "
        "drawing on each economic code's remaining budget. The whole file is "
        "rejected if any row is invalid or any code lacks budget."
    ),
    responses={
        200: {"description": "Counts of inserted and duplicate rows."},
        400: {"description": "Empty, unreadable, or invalid sheet; missing columns; insufficient budget."},
        409: {"description": "Every row had already been imported."},
    },
)
async def upload_distribution_sheet(
    request: Request,
    file: Annotated[UploadFile, File(description="Distribution sheet (.csv or .xlsx)")],
    db: Annotated[Session, Depends(get_db)],
    uploaded_by: Annotated[str | None, Form(alias="uploadedBy")] = None,
) -> ImportResult:
    """Import a distribution sheet.

    Args:
        request: Used to reach the application settings.
        file: The sheet submitted as multipart/form-data.
        db: Database session injected by ``get_db``.
        uploaded_by: Optional opaque user identifier for the import log.

    Returns:
        An ``ImportResult`` with inserted and duplicate counts.

    Raises:
        HTTPException 400: If the file type is unsupported or the file is too large.
    """
    filename = file.filename or "upload.csv"
    if not filename.lower().endswith(_ALLOWED_SUFFIXES):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type '{filename}'. Upload a .csv or .xlsx file.",
        )

    raw: bytes = await file.read()
    max_bytes = request.app.state.settings.MAX_UPLOAD_BYTES
    if len(raw) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File exceeds the {max_bytes} byte upload limit.",
        )

    logger.info("POST /uploadExcel file='%s' bytes=%d by=%s", filename, len(raw), uploaded_by)
    # parsing and the database work are blocking
    return await run_in_threadpool(
        upload_service.import_distribution_sheet,
        db,
        raw,
        file_name=filename,
        uploaded_by=uploaded_by,
    )


@router.get(
    "/history",
    response_model=list[ImportRecordResponse],
    summary="Import history",
)
def import_history(
    db: Annotated[Session, Depends(get_db)],
) -> list[ImportRecordResponse]:
    return upload_service.list_import_records(db)
