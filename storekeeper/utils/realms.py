"""
Authentication realms and the principals resolved from access tokens.

Admins and users live in disjoint tables with independent id spaces, so a
principal always carries its realm and the two are never interchangeable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Union


class Realm(str, Enum):
    ADMIN = "admin"
    USER = "user"


ALL_REALMS: FrozenSet[str] = frozenset(r.value for r in Realm)


def is_valid_realm(realm: str) -> bool:
    """Return True if the provided realm is one of the supported values."""
    return realm in ALL_REALMS


@dataclass(frozen=True)
class AdminPrincipal:
    id: int
    token_id: str
    realm: Realm = Realm.ADMIN


@dataclass(frozen=True)
class UserPrincipal:
    id: int
    token_id: str
    realm: Realm = Realm.USER


Principal = Union[AdminPrincipal, UserPrincipal]


def make_principal(realm: Realm, principal_id: int, token_id: str) -> Principal:
    if realm == Realm.ADMIN:
        return AdminPrincipal(id=principal_id, token_id=token_id)
    if realm == Realm.USER:
        return UserPrincipal(id=principal_id, token_id=token_id)
    raise ValueError(f"Unknown realm: {realm}")
