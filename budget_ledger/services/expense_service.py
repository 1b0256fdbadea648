"""
Expense service layer.

Expenses are charged against the budget distribution a user holds for an
economic code.  ``expense_budget`` grows through one conditional UPDATE that
only applies while it stays within ``distributed_budget``.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import func, update
from sqlalchemy.orm import Session

from budget_ledger.models.budget_distribution import BudgetDistribution
from budget_ledger.schemas.expense import ExpenseCreate, ExpenseResult

logger = logging.getLogger(__name__)


def list_expenses(db: Session, uid: str) -> list[BudgetDistribution]:
    """Return every distribution held by ``uid`` with its expense total."""
    return (
        db.query(BudgetDistribution)
        .filter(BudgetDistribution.user_id == uid)
        .order_by(BudgetDistribution.id)
        .all()
    )


def record_expense(db: Session, data: ExpenseCreate) -> ExpenseResult:
    """Charge ``expense_amount`` to the user's distribution for the code.

    When a user holds several distributions for the same code the oldest is
    charged.

    Raises:
        HTTPException 404: If the user has no distribution for the code.
        HTTPException 400: If the expense exceeds the remaining balance.
    """
    distribution: BudgetDistribution | None = (
        db.query(BudgetDistribution)
        .filter(
            BudgetDistribution.user_id == data.uid,
            BudgetDistribution.economic_code == data.economic_code,
        )
        .order_by(BudgetDistribution.id)
        .first()
    )
    if distribution is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Budget distribution not found",
        )

    amount = data.expense_amount
    new_expense = func.round(BudgetDistribution.expense_budget + amount, 2)
    stmt = (
        update(BudgetDistribution)
        .where(
            BudgetDistribution.id == distribution.id,
            new_expense <= BudgetDistribution.distributed_budget,
        )
        .values(expense_budget=new_expense)
        .execution_options(synchronize_session=False)
    )
    if db.execute(stmt).rowcount != 1:
        db.rollback()
        logger.warning(
            "record_expense: rejected uid=%s code=%s amount=%.2f",
            data.uid, data.economic_code, amount,
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Expense amount exceeds remaining budget",
        )

    db.commit()
    db.refresh(distribution)

    expense = distribution.expense_budget
    remaining = distribution.distributed_budget - expense
    logger.info(
        "record_expense: distribution=%d amount=%.2f remaining=%.2f",
        distribution.id, amount, remaining,
    )
    return ExpenseResult(
        message="Expense added successfully",
        distribution_id=distribution.id,
        expense_budget=expense,
        remaining_budget=remaining,
    )
