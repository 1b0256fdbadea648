"""ImportRecord model — log of every distribution sheet upload."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from budget_ledger.database import Base


class ImportRecord(Base):
    """Record written after each bulk import attempt, successful or not.

    Attributes:
        id: Primary key.
        file_name: Original filename submitted by the client.
        uploaded_at: Timestamp when the import was processed.
        uploaded_by: Opaque user identifier sent with the upload, if any.
        rows_read: Data rows found in the sheet.
        rows_inserted: Distribution rows written.
        rows_duplicate: Rows skipped because their serial code was already seen.
        status: ``"SUCCESS"``, ``"DUPLICATE"`` or ``"FAILED"``.
        errors_json: JSON-serialised list of error messages.
    """

    __tablename__ = "import_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    file_name = Column(String(500), nullable=False)
    uploaded_at = Column(DateTime, default=func.now(), nullable=False)
    uploaded_by = Column(String(128), nullable=True)
    rows_read = Column(Integer, default=0, nullable=False)
    rows_inserted = Column(Integer, default=0, nullable=False)
    rows_duplicate = Column(Integer, default=0, nullable=False)
    status = Column(String(20), nullable=False)  # SUCCESS | DUPLICATE | FAILED
    errors_json = Column(Text, nullable=True)
