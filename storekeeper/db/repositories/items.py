"""
Item repository functions.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from storekeeper.db import models
from storekeeper.db.repositories.pagination import PageResult, paginate


def get_item(db: Session, item_id: int) -> Optional[models.Item]:
    return db.query(models.Item).filter(models.Item.id == item_id).first()


def list_items(db: Session, *, page: int, per_page: int) -> PageResult:
    q = (
        db.query(models.Item)
        .options(joinedload(models.Item.storage).joinedload(models.Storage.user))
        .order_by(models.Item.id)
    )
    return paginate(q, page=page, per_page=per_page)


def create_item(db: Session, *, storage_id: int, name: str, description: str) -> models.Item:
    item = models.Item(storage_id=storage_id, name=name, description=description)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_item(
    db: Session,
    item: models.Item,
    *,
    name: str,
    description: str,
    storage_id: Optional[int] = None,
) -> models.Item:
    if storage_id is not None:
        item.storage_id = storage_id
    item.name = name
    item.description = description
    db.commit()
    db.refresh(item)
    return item


def delete_item(db: Session, item: models.Item) -> None:
    db.delete(item)
    db.commit()
