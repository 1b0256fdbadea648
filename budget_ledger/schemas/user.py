"""Pydantic v2 schemas for the Users module."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from budget_ledger.schemas.common import CamelModel


class UserCreate(CamelModel):
    """Payload for ``POST /users``."""

    uid: str = Field(..., min_length=1, max_length=128, description="External identity string.")
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=200)
    role: str | None = Field(default=None, max_length=50)
    upazila_id: str | None = Field(default=None, max_length=50)
    profile: dict[str, Any] | None = None


class UserUpdate(CamelModel):
    """Partial payload for ``PUT /user/{id}``; only supplied fields are written."""

    uid: str | None = Field(default=None, min_length=1, max_length=128)
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=200)
    role: str | None = Field(default=None, max_length=50)
    upazila_id: str | None = Field(default=None, max_length=50)
    profile: dict[str, Any] | None = None

    @field_validator("uid")
    @classmethod
    def uid_not_null(cls, value: str | None) -> str:
        # Omitting uid keeps the stored one; an explicit null would erase it.
        if value is None:
            raise ValueError("uid cannot be null")
        return value


class UserResponse(CamelModel):
    id: int
    uid: str
    name: str | None = None
    email: str | None = None
    role: str | None = None
    upazila_id: str | None = None
    profile: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime
