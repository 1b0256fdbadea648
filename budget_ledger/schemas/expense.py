"""Pydantic v2 schemas for the Expenses module."""

from __future__ import annotations

from pydantic import Field

from budget_ledger.schemas.common import CamelModel, Money


class ExpenseCreate(CamelModel):
    """Payload for ``POST /expenses``."""

    uid: str = Field(..., min_length=1, max_length=128)
    economic_code: str = Field(..., min_length=1, max_length=50)
    expense_amount: Money = Field(..., gt=0)


class ExpenseResult(CamelModel):
    """Confirmation returned after an expense is recorded.

    Attributes:
        message: Fixed confirmation text.
        distribution_id: Distribution the expense was charged to.
        expense_budget: Expense total after this expense.
        remaining_budget: ``distributed_budget - expense_budget`` afterwards.
    """

    message: str
    distribution_id: int
    expense_budget: float
    remaining_budget: float
