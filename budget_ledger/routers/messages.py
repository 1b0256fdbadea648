"""
Messages router (append-only log).

Endpoints
---------
GET  /messages       — All messages, newest first.
POST /messages       — Store any JSON object; the server stamps ``createdAt``.
GET  /messages/{id}  — One message.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.orm import Session

from budget_ledger.database import get_db
from budget_ledger.schemas.message import MessageRecord
from budget_ledger.services import message_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.get("", response_model=list[MessageRecord], summary="List messages")
def list_messages(db: Annotated[Session, Depends(get_db)]) -> list[MessageRecord]:
    return [MessageRecord.model_validate(m) for m in message_service.list_messages(db)]


@router.post(
    "",
    response_model=MessageRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Post message",
    responses={400: {"description": "Empty payload."}},
)
def create_message(
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[Session, Depends(get_db)],
) -> MessageRecord:
    return MessageRecord.model_validate(message_service.create_message(db, payload))


@router.get(
    "/{message_id}",
    response_model=MessageRecord,
    summary="Get message",
    responses={404: {"description": "Unknown id."}},
)
def get_message(
    message_id: Annotated[int, Path(ge=1)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageRecord:
    return MessageRecord.model_validate(message_service.get_message(db, message_id))
