"""BudgetDistribution model — one allocation from an economic code to an upazila."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from budget_ledger.database import Base


class BudgetDistribution(Base):
    """Ledger row for an amount distributed to an upazila under a code.

    ``economic_code`` is the code string, not a foreign key: economic codes
    are soft-deleted, so the reference stays readable after deactivation.

    Attributes:
        id: Primary key.
        upazila_id: Receiving upazila identifier.
        upazila_name: Snapshot of the upazila name at distribution time.
        user_id: ``uid`` of the user who spends against this row (optional).
        economic_code: Code the amount was drawn from.
        distributed_budget: Amount distributed (> 0).
        expense_budget: Running total of expenses recorded against it.
        serial_code: Serial code from a bulk import sheet (unique when set).
        created_at: Row creation timestamp.
    """

    __tablename__ = "budget_distributions"
    __table_args__ = (
        CheckConstraint("distributed_budget > 0", name="ck_distributions_positive"),
        CheckConstraint("expense_budget >= 0", name="ck_distributions_expense_nonneg"),
        CheckConstraint(
            "expense_budget <= distributed_budget", name="ck_distributions_expense_within"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    upazila_id = Column(String(50), nullable=False, index=True)
    upazila_name = Column(String(200), nullable=True)
    user_id = Column(String(128), nullable=True, index=True)
    economic_code = Column(String(50), nullable=False, index=True)
    distributed_budget = Column(Numeric(15, 2), nullable=False)
    expense_budget = Column(Numeric(15, 2), default=0, nullable=False)
    serial_code = Column(String(100), unique=True, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
