"""Pydantic v2 schemas for the Messages module."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from budget_ledger.schemas.common import CamelModel


class MessageRecord(CamelModel):
    id: int
    payload: dict[str, Any]
    created_at: datetime
