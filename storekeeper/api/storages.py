"""
Storages API endpoints (admin realm only).
"""
from typing import Tuple

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storekeeper.api.deps import bound_storage, page_params, require_admin, storage_create_body, storage_update_body
from storekeeper.api.responses import envelope, page_payload, serialize
from storekeeper.db import models, schemas
from storekeeper.db.database import get_db
from storekeeper.services.storage_service import StorageService

router = APIRouter(prefix="/storages", tags=["storages"], dependencies=[Depends(require_admin)])


@router.get("")
def list_storages(paging: Tuple[int, int] = Depends(page_params), db: Session = Depends(get_db)):
    page, per_page = paging
    result = StorageService(db).list(page=page, per_page=per_page)
    return envelope(page_payload(result, schemas.StorageWithUser))


@router.post("")
def create_storage(
    payload: schemas.StorageWrite = Depends(storage_create_body),
    db: Session = Depends(get_db),
):
    storage = StorageService(db).create(payload)
    return envelope(serialize(storage, schemas.Storage), "The storage created successfully", status_code=status.HTTP_201_CREATED)


@router.get("/{storage_id}")
def show_storage(storage: models.Storage = Depends(bound_storage)):
    return envelope(serialize(storage, schemas.StorageWithUser))


@router.api_route("/{storage_id}", methods=["PUT", "PATCH"])
def update_storage(
    storage: models.Storage = Depends(bound_storage),
    payload: schemas.StorageWrite = Depends(storage_update_body),
    db: Session = Depends(get_db),
):
    storage = StorageService(db).update(storage, payload)
    return envelope(serialize(storage, schemas.Storage), "The storage updated successfully", status_code=status.HTTP_202_ACCEPTED)


@router.delete("/{storage_id}")
def delete_storage(storage: models.Storage = Depends(bound_storage), db: Session = Depends(get_db)):
    StorageService(db).delete(storage)
    return envelope(None, "The storage deleted successfully", status_code=status.HTTP_202_ACCEPTED)
