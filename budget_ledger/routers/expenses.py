"""
Expenses router.

Endpoints
---------
GET  /expenses/{uid} — Distributions held by a user, with expense totals.
POST /expenses       — Charge an expense to the user's distribution.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from budget_ledger.database import get_db
from budget_ledger.schemas.budget_distribution import DistributionResponse
from budget_ledger.schemas.expense import ExpenseCreate, ExpenseResult
from budget_ledger.services import expense_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.get("/{uid}", response_model=list[DistributionResponse], summary="List user expenses")
def list_expenses(
    uid: Annotated[str, Path(description="External identity string.")],
    db: Annotated[Session, Depends(get_db)],
) -> list[DistributionResponse]:
    rows = expense_service.list_expenses(db, uid)
    logger.debug("list_expenses: uid=%s %d records", uid, len(rows))
    return [DistributionResponse.model_validate(r) for r in rows]


@router.post(
    "",
    response_model=ExpenseResult,
    summary="Record an expense",
    responses={
        400: {"description": "Expense exceeds the remaining distributed budget."},
        404: {"description": "User has no distribution for this code."},
    },
)
def record_expense(
    data: ExpenseCreate,
    db: Annotated[Session, Depends(get_db)],
) -> ExpenseResult:
    logger.info(
        "POST /expenses uid=%s code=%s amount=%.2f",
        data.uid, data.economic_code, data.expense_amount,
    )
    return expense_service.record_expense(db, data)
