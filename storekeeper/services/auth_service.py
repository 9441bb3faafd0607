"""
Register/login/logout for one realm.

Admins and users share the flow but never the credential table or tokens:
an ``AuthService`` is bound to exactly one realm.
"""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from storekeeper.db import schemas
from storekeeper.db.repositories import admins as admin_repo
from storekeeper.db.repositories import users as user_repo
from storekeeper.errors import AuthenticationError, ValidationError
from storekeeper.services.persistence import persisting
from storekeeper.services.token_service import TokenService
from storekeeper.utils.passwords import hash_password, verify_password
from storekeeper.utils.realms import Principal, Realm
from storekeeper.utils.validation import taken_message

logger = logging.getLogger("storekeeper.auth")


class AuthService:
    def __init__(self, db: Session, realm: Realm, tokens: TokenService | None = None):
        self.db = db
        self.realm = realm
        self.tokens = tokens or TokenService(db)

    def _get_by_email(self, email: str):
        if self.realm == Realm.ADMIN:
            return admin_repo.get_admin_by_email(self.db, email)
        return user_repo.get_user_by_email(self.db, email)

    def _email_taken(self, email: str) -> bool:
        repo = admin_repo if self.realm == Realm.ADMIN else user_repo
        return repo.email_taken(self.db, email)

    def _create(self, *, name: str, email: str, password_hash: str):
        repo_create = admin_repo.create_admin if self.realm == Realm.ADMIN else user_repo.create_user
        return repo_create(self.db, name=name, email=email, password_hash=password_hash, commit=False)

    def register(self, payload: schemas.RegisterRequest) -> schemas.AuthPayload:
        if self._email_taken(payload.email):
            raise ValidationError(taken_message("email"))
        # Account and first token are committed together or not at all
        with persisting(self.db, f"{self.realm.value} register", unique_field="email"):
            account = self._create(
                name=payload.name,
                email=payload.email,
                password_hash=hash_password(payload.password),
            )
            token = self.tokens.issue(self.realm, account.id, commit=False)
            self.db.commit()
            self.db.refresh(account)
        logger.info("Registered %s id=%s", self.realm.value, account.id)
        return schemas.AuthPayload(name=account.name, email=account.email, token=token)

    def login(self, payload: schemas.LoginRequest) -> schemas.AuthPayload:
        account = self._get_by_email(payload.email)
        if account is None or not verify_password(payload.password, account.password_hash):
            logger.info("Failed %s login", self.realm.value)
            raise AuthenticationError()
        token = self.tokens.issue(self.realm, account.id)
        return schemas.AuthPayload(name=account.name, email=account.email, token=token)

    def logout(self, principal: Principal) -> None:
        if principal.realm != self.realm:
            raise AuthenticationError()
        self.tokens.revoke(principal.token_id)
