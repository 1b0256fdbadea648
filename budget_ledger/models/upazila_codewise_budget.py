"""UpazilaCodewiseBudget and UpazilaAllocation — per-upazila allocation ledger."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from budget_ledger.database import Base


class UpazilaCodewiseBudget(Base):
    """Allocation ledger header, created lazily on an upazila's first allocation.

    Attributes:
        id: Primary key.
        upazila_id: Upazila identifier (one ledger per upazila).
        upazila_name: Upazila name as given on first allocation.
        allocations: Ordered allocation entries, one per economic code.
    """

    __tablename__ = "upazila_codewise_budgets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    upazila_id = Column(String(50), unique=True, nullable=False)
    upazila_name = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    allocations = relationship(
        "UpazilaAllocation",
        back_populates="codewise_budget",
        lazy="select",
        order_by="UpazilaAllocation.id",
        cascade="all, delete-orphan",
    )


class UpazilaAllocation(Base):
    """One ``(economic_code, amount)`` entry inside an upazila's ledger.

    Attributes:
        id: Primary key; also the entry's position in the list.
        codewise_budget_id: FK to the owning ``UpazilaCodewiseBudget``.
        economic_code: Economic code allocated.
        amount: Cumulative amount allocated under this code.
    """

    __tablename__ = "upazila_allocations"
    __table_args__ = (
        UniqueConstraint(
            "codewise_budget_id", "economic_code", name="uq_upazila_allocations_code"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    codewise_budget_id = Column(
        Integer, ForeignKey("upazila_codewise_budgets.id"), nullable=False
    )
    economic_code = Column(String(50), nullable=False)
    amount = Column(Numeric(15, 2), default=0, nullable=False)

    # Relationships
    codewise_budget = relationship(
        "UpazilaCodewiseBudget", back_populates="allocations", lazy="select"
    )
