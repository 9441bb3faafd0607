"""
Token issuer/validator.

Issues opaque bearer tokens bound to (realm, principal), resolves presented
tokens back to a principal, and revokes single tokens.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from storekeeper.db.repositories import admins as admin_repo
from storekeeper.db.repositories import tokens as token_repo
from storekeeper.db.repositories import users as user_repo
from storekeeper.services.persistence import persisting
from storekeeper.utils.realms import Principal, Realm, is_valid_realm, make_principal
from storekeeper.utils.settings import get_settings
from storekeeper.utils.token_crypto import parse_token, verify_secret

logger = logging.getLogger("storekeeper.tokens")

_PRINCIPAL_LOOKUPS = {
    Realm.ADMIN: admin_repo.get_admin,
    Realm.USER: user_repo.get_user,
}


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TokenService:
    def __init__(self, db: Session):
        self.db = db

    def issue(self, realm: Realm, principal_id: int, *, commit: bool = True) -> str:
        """Persist a new token for the principal and return its plaintext (only time it is visible).

        With ``commit=False`` the token is only flushed and the caller owns the transaction.
        """
        with persisting(self.db, "token issue"):
            _record, full_token = token_repo.create_token(
                self.db,
                realm=realm.value,
                principal_id=principal_id,
                name=realm.value,
                ttl_minutes=get_settings().token_ttl_minutes,
                commit=commit,
            )
        return full_token

    def validate(self, presented: Optional[str]) -> Optional[Principal]:
        """Resolve a presented token to its principal, or None when it must be rejected."""
        parsed = parse_token(presented or "")
        if not parsed:
            return None
        record = token_repo.get_by_token_id(self.db, token_id=parsed.token_id)
        if record is None:
            return None
        if not verify_secret(parsed.secret, record.token_hash):
            logger.info("Rejected token %s: secret mismatch", record.token_id)
            return None
        if record.expires_at is not None and datetime.now(timezone.utc) >= _as_utc(record.expires_at):
            logger.info("Rejected token %s: expired", record.token_id)
            return None
        if not is_valid_realm(record.realm):
            return None
        realm = Realm(record.realm)
        owner = _PRINCIPAL_LOOKUPS[realm](self.db, record.principal_id)
        if owner is None:
            return None
        token_repo.mark_used_now(self.db, token=record)
        return make_principal(realm, record.principal_id, record.token_id)

    def revoke(self, token_id: str) -> bool:
        """Delete exactly one token; other tokens of the same principal stay valid."""
        with persisting(self.db, "token revoke"):
            deleted = token_repo.delete_token(self.db, token_id=token_id)
        if deleted:
            logger.info("Revoked token %s", token_id)
        return deleted

    def revoke_all(self, realm: Realm, principal_id: int, *, commit: bool = True) -> int:
        with persisting(self.db, "token revoke all"):
            return token_repo.delete_tokens_for_principal(
                self.db, realm=realm.value, principal_id=principal_id, commit=commit
            )
