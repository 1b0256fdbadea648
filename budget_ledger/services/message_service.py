"""Message service layer: append-only log, no update or delete."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from budget_ledger.models.message import Message

logger = logging.getLogger(__name__)


def create_message(db: Session, payload: dict[str, Any]) -> Message:
    """Store ``payload``; ``created_at`` is always assigned by the server.

    Raises:
        HTTPException 400: If the payload is an empty object.
    """
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message payload must not be empty",
        )
    # A client-supplied timestamp would shadow the server's.
    body = {k: v for k, v in payload.items() if k not in ("createdAt", "created_at")}
    message = Message(payload=body)
    db.add(message)
    db.commit()
    db.refresh(message)
    logger.info("create_message: id=%d", message.id)
    return message


def list_messages(db: Session) -> list[Message]:
    return db.query(Message).order_by(Message.created_at.desc(), Message.id.desc()).all()


def get_message(db: Session, message_id: int) -> Message:
    message = db.get(Message, message_id)
    if message is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Message {message_id} not found",
        )
    return message
