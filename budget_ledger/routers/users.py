"""
Users router.

Endpoints
---------
GET    /users       — All users.
POST   /users       — Create a user.
GET    /user/{uid}  — One user by external uid.
PUT    /user/{id}   — Partial update by id, inserting when the id is unknown.
DELETE /user/{id}   — Delete by id; reports how many rows were removed.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from budget_ledger.database import get_db
from budget_ledger.schemas.common import DeleteResult, UpdateResult
from budget_ledger.schemas.user import UserCreate, UserResponse, UserUpdate
from budget_ledger.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.get("/users", response_model=list[UserResponse], summary="List users")
def list_users(db: Annotated[Session, Depends(get_db)]) -> list[UserResponse]:
    users = user_service.list_users(db)
    logger.debug("list_users: %d records", len(users))
    return [UserResponse.model_validate(u) for u in users]


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={409: {"description": "A user with this uid already exists."}},
)
def create_user(
    data: UserCreate,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    logger.info("POST /users uid=%s", data.uid)
    return UserResponse.model_validate(user_service.create_user(db, data))


@router.get(
    "/user/{uid}",
    response_model=UserResponse,
    summary="Get user by uid",
    responses={404: {"description": "Unknown uid."}},
)
def get_user(
    uid: Annotated[str, Path(description="External identity string.")],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    return UserResponse.model_validate(user_service.get_user_by_uid(db, uid))


@router.put(
    "/user/{user_id}",
    response_model=UpdateResult,
    summary="Update or insert user",
    description=(
        "Applies the supplied fields to the user with this id. When no such "
        "user exists one is created with this id, which requires ``uid``."
    ),
    responses={
        400: {"description": "User must be created but no uid was sent."},
        409: {"description": "The uid belongs to another user."},
    },
)
def update_user(
    user_id: Annotated[int, Path(ge=1)],
    data: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> UpdateResult:
    logger.info("PUT /user/%d", user_id)
    return user_service.update_user(db, user_id, data)


@router.delete("/user/{user_id}", response_model=DeleteResult, summary="Delete user")
def delete_user(
    user_id: Annotated[int, Path(ge=1)],
    db: Annotated[Session, Depends(get_db)],
) -> DeleteResult:
    """Delete a user by id.

    Deleting an id that does not exist is not an error; the result simply
    reports ``deletedCount: 0``.
    """
    logger.info("DELETE /user/%d", user_id)
    return user_service.delete_user(db, user_id)
