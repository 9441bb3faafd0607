"""Read models with eager-loaded relations, and the paginated list wrapper."""
from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel

from .users import User
from .storages import Storage
from .items import Item

T = TypeVar("T")


class UserWithStorage(User):
    storage: Optional[Storage] = None


class StorageWithUser(Storage):
    user: Optional[User] = None


class ItemWithStorage(Item):
    storage: Optional[StorageWithUser] = None


class Page(BaseModel, Generic[T]):
    items: List[T]
    total_items: int
    total_pages: int
    page: int
    per_page: int
