"""
Repositories for bearer access tokens.

Implements create/lookup/delete and last-used updates. Only the hash of a
token secret is ever persisted.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storekeeper.db import models
from storekeeper.utils import token_crypto

logger = logging.getLogger("storekeeper.tokens")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_token(
    db: Session,
    *,
    realm: str,
    principal_id: int,
    name: str,
    ttl_minutes: Optional[int] = None,
    commit: bool = True,
) -> Tuple[models.AccessToken, str]:
    token_id, secret, full_token = token_crypto.generate_token()
    created_at = _now()
    token = models.AccessToken(
        realm=realm,
        principal_id=principal_id,
        token_id=token_id,
        token_hash=token_crypto.hash_secret(secret),
        name=name,
        created_at=created_at,
        expires_at=created_at + timedelta(minutes=ttl_minutes) if ttl_minutes else None,
    )
    db.add(token)
    if not commit:
        db.flush()
        return token, full_token
    db.commit()
    db.refresh(token)
    return token, full_token


def get_by_token_id(db: Session, *, token_id: str) -> Optional[models.AccessToken]:
    return (
        db.query(models.AccessToken)
        .filter(models.AccessToken.token_id == token_id)
        .first()
    )


def delete_token(db: Session, *, token_id: str) -> bool:
    deleted = (
        db.query(models.AccessToken)
        .filter(models.AccessToken.token_id == token_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return bool(deleted)


def delete_tokens_for_principal(db: Session, *, realm: str, principal_id: int, commit: bool = True) -> int:
    deleted = (
        db.query(models.AccessToken)
        .filter(
            models.AccessToken.realm == realm,
            models.AccessToken.principal_id == principal_id,
        )
        .delete(synchronize_session=False)
    )
    if commit:
        db.commit()
    return deleted


def mark_used_now(db: Session, *, token: models.AccessToken) -> None:
    token.last_used_at = _now()
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Failed to stamp last_used_at for token %s: %s", token.token_id, e)
