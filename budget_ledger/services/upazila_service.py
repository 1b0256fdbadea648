"""Upazila directory service layer."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from budget_ledger.models.upazila import Upazila
from budget_ledger.schemas.upazila import UpazilaCreate

logger = logging.getLogger(__name__)


def list_upazilas(db: Session) -> list[Upazila]:
    return db.query(Upazila).order_by(Upazila.name).all()


def create_upazila(db: Session, data: UpazilaCreate) -> Upazila:
    """Insert a directory entry, deriving its full field-office code."""
    upazila = Upazila(
        name=data.name,
        district=data.district,
        institute_code=data.institute_code,
        field_office_code=data.field_office_code,
        full_field_office_code=data.institute_code + data.field_office_code,
    )
    db.add(upazila)
    db.commit()
    db.refresh(upazila)
    logger.info(
        "create_upazila: %s full_code=%s (id=%d)",
        upazila.name, upazila.full_field_office_code, upazila.id,
    )
    return upazila
