"""
Storage repository functions.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from storekeeper.db import models
from storekeeper.db.repositories.pagination import PageResult, paginate


def get_storage(db: Session, storage_id: int) -> Optional[models.Storage]:
    return db.query(models.Storage).filter(models.Storage.id == storage_id).first()


def get_storage_for_user(db: Session, user_id: int) -> Optional[models.Storage]:
    return db.query(models.Storage).filter(models.Storage.user_id == user_id).first()


def user_has_storage(db: Session, user_id: int, *, exclude_id: Optional[int] = None) -> bool:
    q = db.query(models.Storage.id).filter(models.Storage.user_id == user_id)
    if exclude_id is not None:
        q = q.filter(models.Storage.id != exclude_id)
    return q.first() is not None


def list_storages(db: Session, *, page: int, per_page: int) -> PageResult:
    q = (
        db.query(models.Storage)
        .options(joinedload(models.Storage.user))
        .order_by(models.Storage.id)
    )
    return paginate(q, page=page, per_page=per_page)


def create_storage(db: Session, *, user_id: int) -> models.Storage:
    storage = models.Storage(user_id=user_id)
    db.add(storage)
    db.commit()
    db.refresh(storage)
    return storage


def update_storage(db: Session, storage: models.Storage, *, user_id: int) -> models.Storage:
    storage.user_id = user_id
    db.commit()
    db.refresh(storage)
    return storage


def delete_storage(db: Session, storage: models.Storage) -> None:
    # Items go with their storage (relationship cascade)
    db.delete(storage)
    db.commit()
