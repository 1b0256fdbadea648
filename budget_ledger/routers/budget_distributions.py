"""
Budget Distributions router.

Endpoints
---------
GET  /budgetDistributions       — Distributions, filterable by code and upazila.
POST /budgetDistributions       — Balance-checked distribution.
GET  /budgetDistributions/{id}  — One distribution.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from budget_ledger.database import get_db
from budget_ledger.schemas.budget_distribution import DistributionCreate, DistributionResponse
from budget_ledger.services import distribution_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/budgetDistributions", tags=["Budget Distributions"])


@router.get("", response_model=list[DistributionResponse], summary="List distributions")
def list_distributions(
    db: Annotated[Session, Depends(get_db)],
    economic_code: Annotated[str | None, Query(alias="economicCode")] = None,
    upazila_id: Annotated[str | None, Query(alias="upazilaId")] = None,
) -> list[DistributionResponse]:
    rows = distribution_service.list_distributions(
        db, economic_code=economic_code, upazila_id=upazila_id
    )
    return [DistributionResponse.model_validate(r) for r in rows]


@router.post(
    "",
    response_model=DistributionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Distribute budget to an upazila",
    description=(
        "Draws ``distributedBudget`` from the economic code's remaining budget. "
        "The request is refused when the amount exceeds what remains; the "
        "code's running total and the new distribution are written together."
    ),
    responses={
        400: {"description": "Amount is not positive or exceeds the remaining budget."},
        404: {"description": "Economic code not found or inactive."},
        409: {"description": "Serial code already used."},
    },
)
def create_distribution(
    data: DistributionCreate,
    db: Annotated[Session, Depends(get_db)],
) -> DistributionResponse:
    """Create a balance-checked budget distribution.

    Args:
        data: Validated distribution payload.
        db: Database session injected by ``get_db``.

    Returns:
        The stored ``DistributionResponse`` (HTTP 201).
    """
    logger.info(
        "POST /budgetDistributions upazila=%s code=%s amount=%.2f",
        data.upazila_id, data.economic_code, data.distributed_budget,
    )
    return DistributionResponse.model_validate(
        distribution_service.create_distribution(db, data)
    )


@router.get(
    "/{distribution_id}",
    response_model=DistributionResponse,
    summary="Get distribution",
    responses={404: {"description": "Unknown id."}},
)
def get_distribution(
    distribution_id: Annotated[int, Path(ge=1)],
    db: Annotated[Session, Depends(get_db)],
) -> DistributionResponse:
    return DistributionResponse.model_validate(
        distribution_service.get_distribution(db, distribution_id)
    )
