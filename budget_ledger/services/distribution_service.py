"""
Budget Distribution service layer.

A distribution draws an amount from an economic code's remaining budget and
records it against an upazila.  The ceiling check and the increment are one
conditional UPDATE (``economic_code_service.reserve_budget``) and the
distribution row is inserted in the same transaction, so either both writes
land or neither does.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from budget_ledger.models.budget_distribution import BudgetDistribution
from budget_ledger.schemas.budget_distribution import DistributionCreate
from budget_ledger.services import economic_code_service

logger = logging.getLogger(__name__)


def list_distributions(
    db: Session,
    economic_code: str | None = None,
    upazila_id: str | None = None,
) -> list[BudgetDistribution]:
    """Return distributions, optionally filtered by code and/or upazila."""
    q = db.query(BudgetDistribution)
    if economic_code is not None:
        q = q.filter(BudgetDistribution.economic_code == economic_code)
    if upazila_id is not None:
        q = q.filter(BudgetDistribution.upazila_id == upazila_id)
    rows = q.order_by(BudgetDistribution.id).all()
    logger.debug("list_distributions: %d records", len(rows))
    return rows


def get_distribution(db: Session, distribution_id: int) -> BudgetDistribution:
    distribution = db.get(BudgetDistribution, distribution_id)
    if distribution is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Budget distribution {distribution_id} not found",
        )
    return distribution


def _serial_code_taken(db: Session, serial_code: str | None) -> bool:
    if serial_code is None:
        return False
    return (
        db.query(BudgetDistribution.id)
        .filter(BudgetDistribution.serial_code == serial_code)
        .first()
        is not None
    )


def create_distribution(db: Session, data: DistributionCreate) -> BudgetDistribution:
    """Distribute part of an economic code's remaining budget to an upazila.

    Args:
        db: Active SQLAlchemy session.
        data: Validated payload; ``distributed_budget`` is already > 0.

    Returns:
        The persisted ``BudgetDistribution``.

    Raises:
        HTTPException 404: If the economic code does not exist or is inactive.
        HTTPException 400: If the amount exceeds the code's remaining budget.
        HTTPException 409: If ``serial_code`` was already used.
    """
    code = economic_code_service.find_active_code(db, data.economic_code)
    amount = data.distributed_budget

    if not economic_code_service.reserve_budget(db, code.id, amount):
        db.rollback()
        db.refresh(code)
        remaining = economic_code_service.remaining_of(code)
        logger.warning(
            "create_distribution: rejected %s amount=%.2f remaining=%.2f",
            code.economic_code, amount, remaining,
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                "Distributed amount exceeds available budget "
                f"(requested {amount:.2f}, remaining {remaining:.2f})"
            ),
        )

    distribution = BudgetDistribution(
        upazila_id=data.upazila_id,
        upazila_name=data.upazila_name,
        user_id=data.user_id,
        economic_code=code.economic_code,
        distributed_budget=amount,
        expense_budget=0,
        serial_code=data.serial_code,
    )
    db.add(distribution)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not _serial_code_taken(db, data.serial_code):
            raise
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Serial code '{data.serial_code}' was already distributed",
        ) from exc
    db.refresh(distribution)

    logger.info(
        "create_distribution: id=%d upazila=%s code=%s amount=%.2f",
        distribution.id, distribution.upazila_id, distribution.economic_code, amount,
    )
    return distribution
