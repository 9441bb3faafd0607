"""
Domain-split Pydantic schemas with a single import surface.
"""

from .auth import RegisterRequest, LoginRequest, AuthPayload
from .users import UserBase, UserWrite, User
from .storages import StorageWrite, Storage
from .items import ItemCreate, ItemUpdate, UserItemCreate, Item
from .listings import UserWithStorage, StorageWithUser, ItemWithStorage, Page

__all__ = [
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "AuthPayload",
    # Users
    "UserBase",
    "UserWrite",
    "User",
    # Storages
    "StorageWrite",
    "Storage",
    # Items
    "ItemCreate",
    "ItemUpdate",
    "UserItemCreate",
    "Item",
    # Listings
    "UserWithStorage",
    "StorageWithUser",
    "ItemWithStorage",
    "Page",
]
