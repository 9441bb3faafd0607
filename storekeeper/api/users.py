"""
Users API endpoints (admin realm only).
"""
from typing import Tuple

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storekeeper.api.deps import bound_user, page_params, require_admin, user_create_body, user_update_body
from storekeeper.api.responses import envelope, page_payload, serialize
from storekeeper.db import models, schemas
from storekeeper.db.database import get_db
from storekeeper.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_admin)])


@router.get("")
def list_users(paging: Tuple[int, int] = Depends(page_params), db: Session = Depends(get_db)):
    page, per_page = paging
    result = UserService(db).list(page=page, per_page=per_page)
    return envelope(page_payload(result, schemas.UserWithStorage))


@router.post("")
def create_user(
    payload: schemas.UserWrite = Depends(user_create_body),
    db: Session = Depends(get_db),
):
    user = UserService(db).create(payload)
    return envelope(serialize(user, schemas.User), "The user created successfully", status_code=status.HTTP_201_CREATED)


@router.get("/{user_id}")
def show_user(user: models.User = Depends(bound_user)):
    return envelope(serialize(user, schemas.UserWithStorage))


@router.api_route("/{user_id}", methods=["PUT", "PATCH"])
def update_user(
    user: models.User = Depends(bound_user),
    payload: schemas.UserWrite = Depends(user_update_body),
    db: Session = Depends(get_db),
):
    user = UserService(db).update(user, payload)
    return envelope(serialize(user, schemas.User), "The user updated successfully", status_code=status.HTTP_202_ACCEPTED)


@router.delete("/{user_id}")
def delete_user(user: models.User = Depends(bound_user), db: Session = Depends(get_db)):
    UserService(db).delete(user)
    return envelope(None, "The user deleted successfully", status_code=status.HTTP_202_ACCEPTED)
