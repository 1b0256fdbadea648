"""
Upazila Codewise Budget service layer.

Each upazila has one ledger holding one allocation entry per economic code.
Upserting allocations either creates the ledger with the submitted entries
or merges them into the existing one: known codes are incremented in place,
new codes are appended.  Codes repeated inside one request are summed first.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from budget_ledger.models.upazila_codewise_budget import UpazilaAllocation, UpazilaCodewiseBudget
from budget_ledger.schemas.codewise_budget import CodewiseBudgetUpsert

logger = logging.getLogger(__name__)


def _merge_request(data: CodewiseBudgetUpsert) -> dict[str, Decimal]:
    """Sum amounts per economic code, keeping first-seen order."""
    merged: dict[str, Decimal] = {}
    for allocation in data.allocations:
        merged[allocation.economic_code] = (
            merged.get(allocation.economic_code, Decimal(0)) + allocation.amount
        )
    return merged


def list_codewise_budgets(db: Session) -> list[UpazilaCodewiseBudget]:
    ledgers = db.query(UpazilaCodewiseBudget).order_by(UpazilaCodewiseBudget.id).all()
    logger.debug("list_codewise_budgets: %d records", len(ledgers))
    return ledgers


def get_codewise_budget(db: Session, upazila_id: str) -> UpazilaCodewiseBudget:
    ledger = (
        db.query(UpazilaCodewiseBudget)
        .filter(UpazilaCodewiseBudget.upazila_id == upazila_id)
        .first()
    )
    if ledger is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No codewise budget for upazila '{upazila_id}'",
        )
    return ledger


def upsert_allocations(db: Session, data: CodewiseBudgetUpsert) -> UpazilaCodewiseBudget:
    """Create or merge an upazila's allocation ledger.

    Args:
        db: Active SQLAlchemy session.
        data: Validated payload with at least one allocation.

    Returns:
        The ledger after the merge, allocations in insertion order.

    Raises:
        HTTPException 409: If a concurrent request created the same ledger
            or entry first.
    """
    merged = _merge_request(data)
    ledger: UpazilaCodewiseBudget | None = (
        db.query(UpazilaCodewiseBudget)
        .filter(UpazilaCodewiseBudget.upazila_id == data.upazila_id)
        .first()
    )

    if ledger is None:
        ledger = UpazilaCodewiseBudget(
            upazila_id=data.upazila_id,
            upazila_name=data.upazila_name,
            allocations=[
                UpazilaAllocation(economic_code=code, amount=amount)
                for code, amount in merged.items()
            ],
        )
        db.add(ledger)
        action = "created"
    else:
        existing = {a.economic_code: a for a in ledger.allocations}
        for code, amount in merged.items():
            entry = existing.get(code)
            if entry is None:
                ledger.allocations.append(UpazilaAllocation(economic_code=code, amount=amount))
                continue
            db.execute(
                update(UpazilaAllocation)
                .where(UpazilaAllocation.id == entry.id)
                .values(amount=func.round(UpazilaAllocation.amount + amount, 2))
                .execution_options(synchronize_session=False)
            )
        ledger.updated_at = func.now()
        action = "merged"

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Codewise budget for upazila '{data.upazila_id}' was modified concurrently",
        ) from exc

    # In-place increments bypassed the identity map; reload everything.
    db.expire_all()
    logger.info(
        "upsert_allocations: %s ledger upazila=%s codes=%s",
        action, data.upazila_id, list(merged),
    )
    return get_codewise_budget(db, data.upazila_id)
