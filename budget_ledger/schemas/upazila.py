"""Pydantic v2 schemas for the Upazila directory."""

from __future__ import annotations

from pydantic import Field

from budget_ledger.schemas.common import CamelModel


class UpazilaCreate(CamelModel):
    """Payload for ``POST /upazila``.

    ``full_field_office_code`` is never accepted from the client; it is
    derived as ``institute_code + field_office_code``.
    """

    name: str = Field(..., min_length=1, max_length=200)
    district: str | None = Field(default=None, max_length=200)
    institute_code: str = Field(..., min_length=1, max_length=50)
    field_office_code: str = Field(..., min_length=1, max_length=50)


class UpazilaResponse(CamelModel):
    id: int
    name: str
    district: str | None = None
    institute_code: str
    field_office_code: str
    full_field_office_code: str
