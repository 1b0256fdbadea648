"""
Upazila directory router.

Endpoints
---------
GET  /upazila — All directory entries ordered by name.
POST /upazila — Add an entry; the full field-office code is derived.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from budget_ledger.database import get_db
from budget_ledger.schemas.upazila import UpazilaCreate, UpazilaResponse
from budget_ledger.services import upazila_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upazila"])


@router.get("/upazila", response_model=list[UpazilaResponse], summary="List upazilas")
def list_upazilas(db: Annotated[Session, Depends(get_db)]) -> list[UpazilaResponse]:
    upazilas = upazila_service.list_upazilas(db)
    logger.debug("list_upazilas: %d records", len(upazilas))
    return [UpazilaResponse.model_validate(u) for u in upazilas]


@router.post(
    "/upazila",
    response_model=UpazilaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create upazila",
    description=(
        "Stores a directory entry. ``fullFieldOfficeCode`` is always "
        "``instituteCode + fieldOfficeCode``."
    ),
)
def create_upazila(
    data: UpazilaCreate,
    db: Annotated[Session, Depends(get_db)],
) -> UpazilaResponse:
    logger.info("POST /upazila name=%s", data.name)
    return UpazilaResponse.model_validate(upazila_service.create_upazila(db, data))
