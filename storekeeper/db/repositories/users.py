"""
User repository functions (user realm credential store and the users resource).
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from storekeeper.db import models
from storekeeper.db.repositories.pagination import PageResult, paginate


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def email_taken(db: Session, email: str, *, exclude_id: Optional[int] = None) -> bool:
    q = db.query(models.User.id).filter(models.User.email == email)
    if exclude_id is not None:
        q = q.filter(models.User.id != exclude_id)
    return q.first() is not None


def list_users(db: Session, *, page: int, per_page: int) -> PageResult:
    q = (
        db.query(models.User)
        .options(joinedload(models.User.storage))
        .order_by(models.User.id)
    )
    return paginate(q, page=page, per_page=per_page)


def create_user(db: Session, *, name: str, email: str, password_hash: str, commit: bool = True) -> models.User:
    user = models.User(name=name, email=email, password_hash=password_hash)
    db.add(user)
    if not commit:
        db.flush()
        return user
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user: models.User, *, name: str, email: str, password_hash: str) -> models.User:
    user.name = name
    user.email = email
    user.password_hash = password_hash
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user: models.User) -> None:
    db.delete(user)
    db.commit()
