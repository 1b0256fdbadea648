"""SQLAlchemy models package for the Budget Ledger service.

Importing all models here ensures that SQLAlchemy's mapper registry is
populated before ``Base.metadata.create_all()`` runs.

Usage from other modules:
    from budget_ledger.models import EconomicCode, BudgetDistribution
"""

# Directory and identity
from budget_ledger.models.user import User  # noqa: F401
from budget_ledger.models.upazila import Upazila  # noqa: F401

# Budget bookkeeping
from budget_ledger.models.economic_code import EconomicCode  # noqa: F401
from budget_ledger.models.budget_distribution import BudgetDistribution  # noqa: F401
from budget_ledger.models.upazila_codewise_budget import (  # noqa: F401
    UpazilaAllocation,
    UpazilaCodewiseBudget,
)

# Cross-cutting
from budget_ledger.models.message import Message  # noqa: F401
from budget_ledger.models.import_record import ImportRecord  # noqa: F401

__all__ = [
    "User",
    "Upazila",
    "EconomicCode",
    "BudgetDistribution",
    "UpazilaCodewiseBudget",
    "UpazilaAllocation",
    "Message",
    "ImportRecord",
]
