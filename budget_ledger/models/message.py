"""Message model — append-only free-form message log."""

from sqlalchemy import JSON, Column, DateTime, Integer
from sqlalchemy.sql import func

from budget_ledger.database import Base


class Message(Base):
    """Free-form message; never updated or deleted once stored.

    Attributes:
        id: Primary key.
        payload: The JSON object the client posted.
        created_at: Server-assigned creation timestamp.
    """

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
