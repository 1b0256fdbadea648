"""Upazila model — directory entry for an administrative subdivision."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from budget_ledger.database import Base


class Upazila(Base):
    """Upazila directory entry.

    Attributes:
        id: Primary key.
        name: Upazila name.
        district: Parent district name.
        institute_code: Institute part of the office code.
        field_office_code: Field-office part of the office code.
        full_field_office_code: ``institute_code + field_office_code``,
            derived on insert.
    """

    __tablename__ = "upazila_info"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    district = Column(String(200), nullable=True)
    institute_code = Column(String(50), nullable=False)
    field_office_code = Column(String(50), nullable=False)
    full_field_office_code = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
