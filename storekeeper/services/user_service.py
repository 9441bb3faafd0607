"""
Users resource: admin-facing CRUD over the user realm's credential store.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from storekeeper.db import models, schemas
from storekeeper.db.repositories import users as user_repo
from storekeeper.db.repositories.pagination import PageResult
from storekeeper.errors import NotFoundError, ValidationError
from storekeeper.services.persistence import persisting
from storekeeper.services.token_service import TokenService
from storekeeper.utils.passwords import hash_password
from storekeeper.utils.realms import Realm
from storekeeper.utils.validation import taken_message


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def list(self, *, page: int, per_page: int) -> PageResult:
        with persisting(self.db, "user list"):
            return user_repo.list_users(self.db, page=page, per_page=per_page)

    def read(self, user_id: int) -> models.User:
        user = user_repo.get_user(self.db, user_id)
        if user is None:
            raise NotFoundError()
        return user

    def create(self, payload: schemas.UserWrite) -> models.User:
        if user_repo.email_taken(self.db, payload.email):
            raise ValidationError(taken_message("email"))
        with persisting(self.db, "user create", unique_field="email"):
            return user_repo.create_user(
                self.db,
                name=payload.name,
                email=payload.email,
                password_hash=hash_password(payload.password),
            )

    def update(self, user: models.User, payload: schemas.UserWrite) -> models.User:
        if user_repo.email_taken(self.db, payload.email, exclude_id=user.id):
            raise ValidationError(taken_message("email"))
        with persisting(self.db, "user update", unique_field="email"):
            return user_repo.update_user(
                self.db,
                user,
                name=payload.name,
                email=payload.email,
                password_hash=hash_password(payload.password),
            )

    def delete(self, user: models.User) -> None:
        # Storage and items cascade; tokens are removed in the same transaction
        with persisting(self.db, "user delete"):
            TokenService(self.db).revoke_all(Realm.USER, user.id, commit=False)
            user_repo.delete_user(self.db, user)
