"""
Field rules that need the store (unique / exists).

They run inside the field validator of the field they belong to, so a body is
judged field by field in declaration order. The session, the record being
replaced (``current``) and the realm travel in the pydantic validation
context; without a context these rules are skipped.
"""
from typing import Any, Dict, Optional

from pydantic import ValidationInfo

from storekeeper.db.repositories import admins as admin_repo
from storekeeper.db.repositories import storages as storage_repo
from storekeeper.db.repositories import users as user_repo
from storekeeper.utils.realms import Realm
from storekeeper.utils.validation import invalid_selection_message, taken_message


def _context(info: ValidationInfo) -> Dict[str, Any]:
    return info.context or {}


def _current_id(ctx: Dict[str, Any]) -> Optional[int]:
    current = ctx.get("current")
    return current.id if current is not None else None


def unique_email(email: str, info: ValidationInfo) -> str:
    ctx = _context(info)
    db = ctx.get("db")
    if db is None:
        return email
    repo = admin_repo if ctx.get("realm", Realm.USER) == Realm.ADMIN else user_repo
    if repo.email_taken(db, email, exclude_id=_current_id(ctx)):
        raise ValueError(taken_message("email"))
    return email


def free_storage_owner(user_id: int, info: ValidationInfo) -> int:
    """The user must exist and must not own another storage."""
    ctx = _context(info)
    db = ctx.get("db")
    if db is None:
        return user_id
    if user_repo.get_user(db, user_id) is None:
        raise ValueError(invalid_selection_message("user_id"))
    if storage_repo.user_has_storage(db, user_id, exclude_id=_current_id(ctx)):
        raise ValueError(taken_message("user_id"))
    return user_id


def existing_storage(storage_id: Optional[int], info: ValidationInfo) -> Optional[int]:
    db = _context(info).get("db")
    if db is None or storage_id is None:
        return storage_id
    if storage_repo.get_storage(db, storage_id) is None:
        raise ValueError(invalid_selection_message("storage_id"))
    return storage_id
