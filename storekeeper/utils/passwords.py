"""Password hashing with Argon2id."""
from __future__ import annotations

from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

from storekeeper.utils.settings import get_settings


@lru_cache(maxsize=None)
def _hasher() -> PasswordHasher:
    settings = get_settings()
    return PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
        hash_len=32,
        type=Type.ID,
    )


def hash_password(password: str) -> str:
    return _hasher().hash(password)


def verify_password(password: str, encoded_hash: str) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _hasher().verify(encoded_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def reset_hasher_cache() -> None:
    """Rebuild the hasher on next use (after settings change in tests)."""
    _hasher.cache_clear()
