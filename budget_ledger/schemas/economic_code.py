"""
Pydantic v2 schemas for the Economic Codes module.

``remaining_budget`` is never stored; the service computes it as
``total_budget - distributed_budget`` when building responses.
"""

from __future__ import annotations

from pydantic import ConfigDict, Field

from budget_ledger.schemas.common import CamelModel, Money


class EconomicCodeCreate(CamelModel):
    """Payload for ``POST /economicCodes``.

    Any ``distributedBudget`` sent by the client is ignored: new codes always
    start with nothing distributed.
    """

    economic_code: str = Field(..., min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=500)
    total_budget: Money = Field(..., ge=0, description="Ceiling for all distributions.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "economicCode": "3111101",
                "description": "Basic pay (officers)",
                "totalBudget": 1_000_000,
            }
        }
    )


class EconomicCodeUpdate(CamelModel):
    """Partial payload for ``PUT /economicCodes/{code}``."""

    description: str | None = Field(default=None, max_length=500)
    total_budget: Money | None = Field(default=None, ge=0)


class EconomicCodeResponse(CamelModel):
    """Public representation of an economic code and its running totals."""

    id: int
    economic_code: str
    description: str | None = None
    total_budget: float
    distributed_budget: float
    remaining_budget: float
    active: bool
