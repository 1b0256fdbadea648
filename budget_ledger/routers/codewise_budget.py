"""
Upazila Codewise Budget router.

Endpoints
---------
GET  /upazilaCodewiseBudget               — Every upazila ledger.
POST /upazilaCodewiseBudget               — Create or merge allocations.
GET  /upazilaCodewiseBudget/{upazila_id}  — One upazila's ledger.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from budget_ledger.database import get_db
from budget_ledger.schemas.codewise_budget import CodewiseBudgetResponse, CodewiseBudgetUpsert
from budget_ledger.services import codewise_budget_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upazilaCodewiseBudget", tags=["Upazila Codewise Budget"])


@router.get("", response_model=list[CodewiseBudgetResponse], summary="List upazila ledgers")
def list_codewise_budgets(
    db: Annotated[Session, Depends(get_db)],
) -> list[CodewiseBudgetResponse]:
    ledgers = codewise_budget_service.list_codewise_budgets(db)
    return [CodewiseBudgetResponse.model_validate(ledger) for ledger in ledgers]


@router.post(
    "",
    response_model=CodewiseBudgetResponse,
    summary="Upsert upazila allocations",
    description=(
        "Creates the upazila's ledger on first use. Afterwards each "
        "``{economicCode, amount}`` pair is added to the existing entry for "
        "that code, or appended when the code is new."
    ),
    responses={
        400: {"description": "Missing upazila id/name or allocations."},
        409: {"description": "Ledger was created or changed concurrently."},
    },
)
def upsert_allocations(
    data: CodewiseBudgetUpsert,
    db: Annotated[Session, Depends(get_db)],
) -> CodewiseBudgetResponse:
    logger.info(
        "POST /upazilaCodewiseBudget upazila=%s entries=%d",
        data.upazila_id, len(data.allocations),
    )
    ledger = codewise_budget_service.upsert_allocations(db, data)
    return CodewiseBudgetResponse.model_validate(ledger)


@router.get(
    "/{upazila_id}",
    response_model=CodewiseBudgetResponse,
    summary="Get upazila ledger",
    responses={404: {"description": "No allocations recorded for this upazila."}},
)
def get_codewise_budget(
    upazila_id: Annotated[str, Path()],
    db: Annotated[Session, Depends(get_db)],
) -> CodewiseBudgetResponse:
    ledger = codewise_budget_service.get_codewise_budget(db, upazila_id)
    return CodewiseBudgetResponse.model_validate(ledger)
