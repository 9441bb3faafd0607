"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, and all ORM classes.
"""

from .base import Base, now_utc  # re-export

from .admins import Admin
from .users import User
from .storages import Storage
from .items import Item
from .tokens import AccessToken

__all__ = [
    # base
    "Base",
    "now_utc",
    # credential store
    "Admin",
    "User",
    # resources
    "Storage",
    "Item",
    # tokens
    "AccessToken",
]
