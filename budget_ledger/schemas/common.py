"""
Shared Pydantic v2 schemas reused across multiple modules.

``CamelModel`` is the base for every request/response body: Python code uses
snake_case field names while the JSON wire format uses camelCase
(``economicCode``, ``distributedBudget`` …), which is what the web client
sends.  Either spelling is accepted on input.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

#: Amount of money as sent by clients: at most two decimal places, and it
#: must fit the ``Numeric(15, 2)`` columns.
Money = Annotated[Decimal, Field(max_digits=15, decimal_places=2)]


class CamelModel(BaseModel):
    """Base model with camelCase aliases and ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        coerce_numbers_to_str=True,
    )


class UpdateResult(CamelModel):
    """Outcome of an update-with-upsert operation.

    Attributes:
        matched_count: Rows matched by the update filter (0 or 1).
        modified_count: Rows whose stored values actually changed.
        upserted_id: Primary key of the row created when nothing matched.
    """

    matched_count: int = Field(..., ge=0)
    modified_count: int = Field(..., ge=0)
    upserted_id: int | None = None


class DeleteResult(CamelModel):
    """Outcome of a delete operation; deleting a missing row yields 0."""

    deleted_count: int = Field(..., ge=0)
