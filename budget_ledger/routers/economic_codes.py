"""
Economic Codes router.

Endpoints
---------
GET    /economicCodes         — Active codes (``includeInactive=true`` for all).
POST   /economicCodes         — Create a code; distributed budget starts at 0.
GET    /economicCodes/{code}  — One code with its remaining budget.
PUT    /economicCodes/{code}  — Change description and/or total budget.
DELETE /economicCodes/{code}  — Soft-delete; existing distributions remain.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from budget_ledger.database import get_db
from budget_ledger.schemas.common import DeleteResult
from budget_ledger.schemas.economic_code import (
    EconomicCodeCreate,
    EconomicCodeResponse,
    EconomicCodeUpdate,
)
from budget_ledger.services import economic_code_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/economicCodes", tags=["Economic Codes"])


@router.get(
    "",
    response_model=list[EconomicCodeResponse],
    summary="List economic codes",
)
def list_codes(
    db: Annotated[Session, Depends(get_db)],
    include_inactive: Annotated[
        bool,
        Query(alias="includeInactive", description="Also return soft-deleted codes."),
    ] = False,
) -> list[EconomicCodeResponse]:
    return economic_code_service.list_codes(db, include_inactive=include_inactive)


@router.post(
    "",
    response_model=EconomicCodeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create economic code",
    responses={409: {"description": "The code already exists."}},
)
def create_code(
    data: EconomicCodeCreate,
    db: Annotated[Session, Depends(get_db)],
) -> EconomicCodeResponse:
    logger.info(
        "POST /economicCodes code=%s total_budget=%.2f", data.economic_code, data.total_budget
    )
    return economic_code_service.create_code(db, data)


@router.get(
    "/{economic_code}",
    response_model=EconomicCodeResponse,
    summary="Get economic code",
    responses={404: {"description": "Unknown code."}},
)
def get_code(
    economic_code: Annotated[str, Path()],
    db: Annotated[Session, Depends(get_db)],
) -> EconomicCodeResponse:
    return economic_code_service.get_code(db, economic_code)


@router.put(
    "/{economic_code}",
    response_model=EconomicCodeResponse,
    summary="Update economic code",
    responses={
        400: {"description": "New total budget is below the distributed amount."},
        404: {"description": "Unknown or inactive code."},
    },
)
def update_code(
    economic_code: Annotated[str, Path()],
    data: EconomicCodeUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> EconomicCodeResponse:
    logger.info("PUT /economicCodes/%s", economic_code)
    return economic_code_service.update_code(db, economic_code, data)


@router.delete(
    "/{economic_code}",
    response_model=DeleteResult,
    summary="Deactivate economic code",
    description=(
        "Marks the code inactive. Distributions already made against it stay "
        "readable; new distributions and imports are refused."
    ),
    responses={404: {"description": "Unknown code."}},
)
def deactivate_code(
    economic_code: Annotated[str, Path()],
    db: Annotated[Session, Depends(get_db)],
) -> DeleteResult:
    logger.info("DELETE /economicCodes/%s", economic_code)
    return economic_code_service.deactivate_code(db, economic_code)
