"""Budget Ledger Service: upazila budget allocation and expense tracking API."""

__version__ = "1.0.0"
