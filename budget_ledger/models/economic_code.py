"""EconomicCode model — budget classification code with a spending ceiling."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from budget_ledger.database import Base


class EconomicCode(Base):
    """Budget classification category with a fixed ceiling.

    ``distributed_budget`` starts at 0 and only grows as distributions are
    accepted; the check constraint keeps it within ``[0, total_budget]``.

    Attributes:
        id: Primary key.
        economic_code: Unique classification code, e.g. "3111101".
        description: Human-readable name of the code.
        total_budget: Ceiling for all distributions against this code.
        distributed_budget: Running total of accepted distributions.
        active: Soft-delete flag. Inactive codes accept no new distributions.
    """

    __tablename__ = "economic_codes"
    __table_args__ = (
        CheckConstraint("distributed_budget >= 0", name="ck_economic_codes_distributed_nonneg"),
        CheckConstraint(
            "distributed_budget <= total_budget", name="ck_economic_codes_within_total"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    economic_code = Column(String(50), unique=True, nullable=False)
    description = Column(String(500), nullable=True)
    total_budget = Column(Numeric(15, 2), nullable=False)
    distributed_budget = Column(Numeric(15, 2), default=0, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
