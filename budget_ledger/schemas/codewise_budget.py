"""
Pydantic v2 schemas for the Upazila Codewise Budget ledger.

Canonical request shape::

    {
        "upazilaId": "27",
        "upazilaName": "Savar",
        "allocations": [{"economicCode": "3111101", "amount": 500}]
    }
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from budget_ledger.schemas.common import CamelModel, Money


class AllocationIn(CamelModel):
    economic_code: str = Field(..., min_length=1, max_length=50)
    amount: Money = Field(..., gt=0)


class CodewiseBudgetUpsert(CamelModel):
    """Payload for ``POST /upazilaCodewiseBudget``."""

    upazila_id: str = Field(..., min_length=1, max_length=50)
    upazila_name: str = Field(..., min_length=1, max_length=200)
    allocations: list[AllocationIn] = Field(..., min_length=1)


class AllocationResponse(CamelModel):
    economic_code: str
    amount: float


class CodewiseBudgetResponse(CamelModel):
    id: int
    upazila_id: str
    upazila_name: str
    allocations: list[AllocationResponse] = Field(default_factory=list)
    updated_at: datetime
