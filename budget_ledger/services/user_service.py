"""User service layer: plain CRUD keyed by ``id`` or external ``uid``."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from budget_ledger.models.user import User
from budget_ledger.schemas.common import DeleteResult, UpdateResult
from budget_ledger.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def _ensure_uid_free(db: Session, uid: str, exclude_id: int | None = None) -> None:
    q = db.query(User.id).filter(User.uid == uid)
    if exclude_id is not None:
        q = q.filter(User.id != exclude_id)
    if q.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"User with uid '{uid}' already exists",
        )


def _commit_or_conflict(db: Session, uid: str | None) -> None:
    """Commit; a uniqueness clash on ``uid`` becomes 409, anything else propagates."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if uid is None or db.query(User.id).filter(User.uid == uid).first() is None:
            raise
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"User with uid '{uid}' already exists",
        ) from exc


def _sync_id_sequence(db: Session) -> None:
    """Move the PostgreSQL ``users.id`` sequence past explicitly inserted ids."""
    if db.get_bind().dialect.name != "postgresql":
        return
    db.execute(
        text(
            "SELECT setval(pg_get_serial_sequence('users', 'id'), "
            "(SELECT MAX(id) FROM users))"
        )
    )
    db.commit()


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def get_user_by_uid(db: Session, uid: str) -> User:
    user = db.query(User).filter(User.uid == uid).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User '{uid}' not found",
        )
    return user


def create_user(db: Session, data: UserCreate) -> User:
    _ensure_uid_free(db, data.uid)
    user = User(**data.model_dump())
    db.add(user)
    _commit_or_conflict(db, data.uid)
    db.refresh(user)
    logger.info("create_user: uid=%s (id=%d)", user.uid, user.id)
    return user


def update_user(db: Session, user_id: int, data: UserUpdate) -> UpdateResult:
    """Apply a partial update, inserting the user when ``user_id`` is unknown.

    Raises:
        HTTPException 400: If the user must be created but no ``uid`` was sent.
        HTTPException 409: If the new ``uid`` belongs to another user.
    """
    changes = data.model_dump(exclude_unset=True)
    user = db.get(User, user_id)

    if user is None:
        if not changes.get("uid"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="uid is required to create a user",
            )
        _ensure_uid_free(db, changes["uid"])
        db.add(User(id=user_id, **changes))
        _commit_or_conflict(db, changes["uid"])
        _sync_id_sequence(db)
        logger.info("update_user: upserted id=%d uid=%s", user_id, changes["uid"])
        return UpdateResult(matched_count=0, modified_count=0, upserted_id=user_id)

    if changes.get("uid"):
        _ensure_uid_free(db, changes["uid"], exclude_id=user_id)

    modified = False
    for field, value in changes.items():
        if getattr(user, field) != value:
            setattr(user, field, value)
            modified = True

    if modified:
        _commit_or_conflict(db, changes.get("uid"))
    logger.info("update_user: id=%d fields=%s modified=%s", user_id, list(changes), modified)
    return UpdateResult(matched_count=1, modified_count=int(modified))


def delete_user(db: Session, user_id: int) -> DeleteResult:
    """Delete by id; a missing id yields ``deleted_count == 0``, not an error."""
    deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
    db.commit()
    logger.info("delete_user: id=%d deleted=%d", user_id, deleted)
    return DeleteResult(deleted_count=deleted)
