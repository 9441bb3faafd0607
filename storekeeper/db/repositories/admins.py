"""
Admin repository functions (admin realm credential store).
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from storekeeper.db import models


def get_admin(db: Session, admin_id: int) -> Optional[models.Admin]:
    return db.query(models.Admin).filter(models.Admin.id == admin_id).first()


def get_admin_by_email(db: Session, email: str) -> Optional[models.Admin]:
    return db.query(models.Admin).filter(models.Admin.email == email).first()


def create_admin(db: Session, *, name: str, email: str, password_hash: str, commit: bool = True) -> models.Admin:
    admin = models.Admin(name=name, email=email, password_hash=password_hash)
    db.add(admin)
    if not commit:
        db.flush()
        return admin
    db.commit()
    db.refresh(admin)
    return admin


def email_taken(db: Session, email: str, *, exclude_id: Optional[int] = None) -> bool:
    q = db.query(models.Admin.id).filter(models.Admin.email == email)
    if exclude_id is not None:
        q = q.filter(models.Admin.id != exclude_id)
    return q.first() is not None
