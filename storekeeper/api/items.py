"""
Items API endpoints.

Admins get full CRUD on ``/items``; user-realm callers may only create items
through ``POST /users/items``, which always targets their own storage.
"""
from typing import Tuple

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storekeeper.api.deps import (
    bound_item,
    item_create_body,
    item_update_body,
    page_params,
    require_admin,
    require_user,
    user_item_body,
)
from storekeeper.api.responses import envelope, page_payload, serialize
from storekeeper.db import models, schemas
from storekeeper.db.database import get_db
from storekeeper.services.item_service import ItemService
from storekeeper.utils.realms import Principal

router = APIRouter(prefix="/items", tags=["items"])
user_items_router = APIRouter(prefix="/users/items", tags=["items"])


@user_items_router.post("")
def create_own_item(
    principal: Principal = Depends(require_user),
    payload: schemas.UserItemCreate = Depends(user_item_body),
    db: Session = Depends(get_db),
):
    item = ItemService(db).create(payload, principal)
    return envelope(serialize(item, schemas.Item), "The item created successfully", status_code=status.HTTP_201_CREATED)


@router.get("", dependencies=[Depends(require_admin)])
def list_items(paging: Tuple[int, int] = Depends(page_params), db: Session = Depends(get_db)):
    page, per_page = paging
    result = ItemService(db).list(page=page, per_page=per_page)
    return envelope(page_payload(result, schemas.ItemWithStorage))


@router.post("")
def create_item(
    principal: Principal = Depends(require_admin),
    payload: schemas.ItemCreate = Depends(item_create_body),
    db: Session = Depends(get_db),
):
    item = ItemService(db).create(payload, principal)
    return envelope(serialize(item, schemas.Item), "The item created successfully", status_code=status.HTTP_201_CREATED)


@router.get("/{item_id}", dependencies=[Depends(require_admin)])
def show_item(item: models.Item = Depends(bound_item)):
    return envelope(serialize(item, schemas.ItemWithStorage))


@router.api_route("/{item_id}", methods=["PUT", "PATCH"], dependencies=[Depends(require_admin)])
def update_item(
    item: models.Item = Depends(bound_item),
    payload: schemas.ItemUpdate = Depends(item_update_body),
    db: Session = Depends(get_db),
):
    item = ItemService(db).update(item, payload)
    return envelope(serialize(item, schemas.Item), "The item updated successfully", status_code=status.HTTP_202_ACCEPTED)


@router.delete("/{item_id}", dependencies=[Depends(require_admin)])
def delete_item(item: models.Item = Depends(bound_item), db: Session = Depends(get_db)):
    ItemService(db).delete(item)
    return envelope(None, "The item deleted successfully", status_code=status.HTTP_202_ACCEPTED)
