"""Pydantic v2 schemas for Budget Distributions."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from budget_ledger.schemas.common import CamelModel, Money


class DistributionCreate(CamelModel):
    """Payload for ``POST /budgetDistributions``."""

    upazila_id: str = Field(..., min_length=1, max_length=50)
    upazila_name: str | None = Field(default=None, max_length=200)
    user_id: str | None = Field(default=None, max_length=128)
    economic_code: str = Field(..., min_length=1, max_length=50)
    distributed_budget: Money = Field(..., gt=0, description="Amount to distribute.")
    serial_code: str | None = Field(default=None, max_length=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "upazilaId": "27",
                "upazilaName": "Savar",
                "userId": "firebase-uid-123",
                "economicCode": "3111101",
                "distributedBudget": 600,
            }
        }
    )


class DistributionResponse(CamelModel):
    id: int
    upazila_id: str
    upazila_name: str | None = None
    user_id: str | None = None
    economic_code: str
    distributed_budget: float
    expense_budget: float
    serial_code: str | None = None
    created_at: datetime
