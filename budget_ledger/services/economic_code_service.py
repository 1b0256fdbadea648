"""
Economic Code service layer.

Owns every write to ``economic_codes``.  The running ``distributed_budget``
total is only ever changed through ``reserve_budget``, a single conditional
UPDATE that applies the increment only while the new total stays within
``total_budget``.  Two concurrent reservations therefore cannot both slip
under the ceiling.

Codes are soft-deleted (``active = False``): distributions that reference a
deactivated code stay readable, but no new distribution may draw from it.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from budget_ledger.models.economic_code import EconomicCode
from budget_ledger.schemas.common import DeleteResult
from budget_ledger.schemas.economic_code import (
    EconomicCodeCreate,
    EconomicCodeResponse,
    EconomicCodeUpdate,
)

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def remaining_of(code: EconomicCode) -> Decimal:
    """Return ``total_budget - distributed_budget`` in cents."""
    return (Decimal(code.total_budget) - Decimal(code.distributed_budget or 0)).quantize(CENT)


def build_response(code: EconomicCode) -> EconomicCodeResponse:
    return EconomicCodeResponse(
        id=code.id,
        economic_code=code.economic_code,
        description=code.description,
        total_budget=float(code.total_budget),
        distributed_budget=float(code.distributed_budget or 0),
        remaining_budget=remaining_of(code),
        active=code.active,
    )


def find_active_code(db: Session, economic_code: str) -> EconomicCode:
    """Return the active ``EconomicCode`` row for ``economic_code``.

    Raises:
        HTTPException 404: If no active code with that value exists.
    """
    code: EconomicCode | None = (
        db.query(EconomicCode)
        .filter(EconomicCode.economic_code == economic_code, EconomicCode.active.is_(True))
        .first()
    )
    if code is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Economic Code not found",
        )
    return code


def reserve_budget(db: Session, code_id: int, amount: Decimal) -> bool:
    """Atomically add ``amount`` to a code's distributed total if it fits.

    The increment and the ceiling check are one statement, so the caller's
    earlier read of the row may be stale without breaking the invariant.
    Does not commit; the caller commits together with its own writes.

    Args:
        db: Active SQLAlchemy session.
        code_id: Primary key of the ``EconomicCode``.
        amount: Positive amount to add, in whole cents.

    Returns:
        True when the row was updated, False when the amount would exceed
        the remaining budget (or the code is inactive).
    """
    # Rounded so that binary floats on SQLite compare like NUMERIC on PostgreSQL.
    new_total = func.round(EconomicCode.distributed_budget + amount, 2)
    stmt = (
        update(EconomicCode)
        .where(
            EconomicCode.id == code_id,
            EconomicCode.active.is_(True),
            new_total <= EconomicCode.total_budget,
        )
        .values(distributed_budget=new_total)
        .execution_options(synchronize_session=False)
    )
    return db.execute(stmt).rowcount == 1


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------


def list_codes(db: Session, include_inactive: bool = False) -> list[EconomicCodeResponse]:
    q = db.query(EconomicCode)
    if not include_inactive:
        q = q.filter(EconomicCode.active.is_(True))
    codes = q.order_by(EconomicCode.economic_code).all()
    logger.debug("list_codes: %d records include_inactive=%s", len(codes), include_inactive)
    return [build_response(c) for c in codes]


def get_code(db: Session, economic_code: str) -> EconomicCodeResponse:
    """Return one code by value, including soft-deleted ones.

    Raises:
        HTTPException 404: If the code was never created.
    """
    code = db.query(EconomicCode).filter(EconomicCode.economic_code == economic_code).first()
    if code is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Economic Code not found",
        )
    return build_response(code)


def create_code(db: Session, data: EconomicCodeCreate) -> EconomicCodeResponse:
    """Create a new economic code with nothing distributed yet.

    Raises:
        HTTPException 409: If the code value already exists (active or not).
    """
    if db.query(EconomicCode).filter(EconomicCode.economic_code == data.economic_code).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Economic Code '{data.economic_code}' already exists",
        )

    code = EconomicCode(
        economic_code=data.economic_code,
        description=data.description,
        total_budget=data.total_budget,
        distributed_budget=0,
        active=True,
    )
    db.add(code)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Economic Code '{data.economic_code}' already exists",
        ) from exc
    db.refresh(code)

    logger.info(
        "create_code: %s total_budget=%.2f (id=%d)",
        code.economic_code, float(code.total_budget), code.id,
    )
    return build_response(code)


def update_code(
    db: Session, economic_code: str, data: EconomicCodeUpdate
) -> EconomicCodeResponse:
    """Change a code's description and/or ceiling.

    The ceiling may never drop below what is already distributed; that check
    is part of the UPDATE itself.

    Raises:
        HTTPException 404: If the code does not exist or is inactive.
        HTTPException 400: If ``total_budget`` is below ``distributed_budget``.
    """
    code = find_active_code(db, economic_code)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if "total_budget" in changes:
        new_total = changes.pop("total_budget")
        stmt = (
            update(EconomicCode)
            .where(EconomicCode.id == code.id, EconomicCode.distributed_budget <= new_total)
            .values(total_budget=new_total)
            .execution_options(synchronize_session=False)
        )
        if db.execute(stmt).rowcount != 1:
            db.rollback()
            db.refresh(code)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"Total budget {new_total:.2f} is below the already distributed "
                    f"amount {float(code.distributed_budget):.2f}"
                ),
            )

    for field, value in changes.items():
        setattr(code, field, value)

    db.commit()
    db.refresh(code)
    logger.info("update_code: %s fields=%s", economic_code, list(data.model_fields_set))
    return build_response(code)


def deactivate_code(db: Session, economic_code: str) -> DeleteResult:
    """Soft-delete a code.

    Returns ``deleted_count`` 1 when the code was active and 0 when it had
    already been deactivated.

    Raises:
        HTTPException 404: If the code was never created.
    """
    code = db.query(EconomicCode).filter(EconomicCode.economic_code == economic_code).first()
    if code is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Economic Code not found",
        )
    if not code.active:
        return DeleteResult(deleted_count=0)

    code.active = False
    db.commit()
    logger.info("deactivate_code: %s", economic_code)
    return DeleteResult(deleted_count=1)
