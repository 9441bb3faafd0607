"""
Storages resource: one storage per user, enforced here and by the
``storages.user_id`` unique constraint.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from storekeeper.db import models, schemas
from storekeeper.db.repositories import storages as storage_repo
from storekeeper.db.repositories import users as user_repo
from storekeeper.db.repositories.pagination import PageResult
from storekeeper.errors import NotFoundError, ValidationError
from storekeeper.services.persistence import persisting
from storekeeper.utils.validation import invalid_selection_message, taken_message


class StorageService:
    def __init__(self, db: Session):
        self.db = db

    def list(self, *, page: int, per_page: int) -> PageResult:
        with persisting(self.db, "storage list"):
            return storage_repo.list_storages(self.db, page=page, per_page=per_page)

    def read(self, storage_id: int) -> models.Storage:
        storage = storage_repo.get_storage(self.db, storage_id)
        if storage is None:
            raise NotFoundError()
        return storage

    def _check_owner(self, user_id: int, *, exclude_id: int | None = None) -> None:
        if user_repo.get_user(self.db, user_id) is None:
            raise ValidationError(invalid_selection_message("user_id"))
        if storage_repo.user_has_storage(self.db, user_id, exclude_id=exclude_id):
            raise ValidationError(taken_message("user_id"))

    def create(self, payload: schemas.StorageWrite) -> models.Storage:
        self._check_owner(payload.user_id)
        with persisting(self.db, "storage create", unique_field="user_id"):
            return storage_repo.create_storage(self.db, user_id=payload.user_id)

    def update(self, storage: models.Storage, payload: schemas.StorageWrite) -> models.Storage:
        # A storage may keep its own current owner
        self._check_owner(payload.user_id, exclude_id=storage.id)
        with persisting(self.db, "storage update", unique_field="user_id"):
            return storage_repo.update_storage(self.db, storage, user_id=payload.user_id)

    def delete(self, storage: models.Storage) -> None:
        with persisting(self.db, "storage delete"):
            storage_repo.delete_storage(self.db, storage)
