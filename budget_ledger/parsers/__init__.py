"""Sheet parsers for bulk imports.

Usage::

    from budget_ledger.parsers import DistributionSheetParser

    result = DistributionSheetParser(raw_bytes, file_name="rows.csv").parse()
    if result.ok:
        ...
"""

from .base_parser import BaseParser, ParseResult
from .distribution_sheet_parser import REQUIRED_COLUMNS, DistributionSheetParser

__all__ = [
    "BaseParser",
    "ParseResult",
    "DistributionSheetParser",
    "REQUIRED_COLUMNS",
]
