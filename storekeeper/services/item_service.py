"""
Items resource.

Admins may place an item in any storage. A user-realm caller always creates
into their own storage: the body's storage_id is never consulted for them.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from storekeeper.db import models, schemas
from storekeeper.db.repositories import items as item_repo
from storekeeper.db.repositories import storages as storage_repo
from storekeeper.db.repositories.pagination import PageResult
from storekeeper.errors import NotFoundError, ValidationError
from storekeeper.services.persistence import persisting
from storekeeper.utils.realms import Principal, UserPrincipal
from storekeeper.utils.validation import invalid_selection_message

NO_OWN_STORAGE_MESSAGE = "You do not have a storage to add items to."


class ItemService:
    def __init__(self, db: Session):
        self.db = db

    def list(self, *, page: int, per_page: int) -> PageResult:
        with persisting(self.db, "item list"):
            return item_repo.list_items(self.db, page=page, per_page=per_page)

    def read(self, item_id: int) -> models.Item:
        item = item_repo.get_item(self.db, item_id)
        if item is None:
            raise NotFoundError()
        return item

    def _require_storage(self, storage_id: int) -> None:
        if storage_repo.get_storage(self.db, storage_id) is None:
            raise ValidationError(invalid_selection_message("storage_id"))

    def _resolve_storage_id(self, principal: Principal, requested: Optional[int]) -> int:
        if isinstance(principal, UserPrincipal):
            own = storage_repo.get_storage_for_user(self.db, principal.id)
            if own is None:
                raise ValidationError(NO_OWN_STORAGE_MESSAGE)
            return own.id
        self._require_storage(requested)
        return requested

    def create(
        self,
        payload: schemas.ItemCreate | schemas.UserItemCreate,
        principal: Principal,
    ) -> models.Item:
        storage_id = self._resolve_storage_id(principal, getattr(payload, "storage_id", None))
        with persisting(self.db, "item create"):
            return item_repo.create_item(
                self.db,
                storage_id=storage_id,
                name=payload.name,
                description=payload.description,
            )

    def update(self, item: models.Item, payload: schemas.ItemUpdate) -> models.Item:
        if payload.storage_id is not None:
            self._require_storage(payload.storage_id)
        with persisting(self.db, "item update"):
            return item_repo.update_item(
                self.db,
                item,
                name=payload.name,
                description=payload.description,
                storage_id=payload.storage_id,
            )

    def delete(self, item: models.Item) -> None:
        with persisting(self.db, "item delete"):
            item_repo.delete_item(self.db, item)
