"""User model — account identified by an opaque external ``uid``."""

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from budget_ledger.database import Base


class User(Base):
    """Application user.

    The service performs no authentication; ``uid`` is whatever identity
    string the client's identity provider issued.

    Attributes:
        id: Primary key.
        uid: Unique external identity string.
        name: Display name.
        email: Contact email.
        role: Free-form role label, e.g. "admin" or "upazila_officer".
        upazila_id: Upazila the user reports expenses for (optional).
        profile: Any extra profile fields sent by the client.
        created_at: Row creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    uid = Column(String(128), unique=True, nullable=False)
    name = Column(String(200), nullable=True)
    email = Column(String(200), nullable=True)
    role = Column(String(50), nullable=True)
    upazila_id = Column(String(50), nullable=True)
    profile = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
