"""Runtime settings sourced from the environment (and an optional .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    log_level: str
    token_ttl_minutes: Optional[int]
    page_size: int
    max_page_size: int
    argon2_time_cost: int
    argon2_memory_cost: int
    argon2_parallelism: int
    cors_origins: Tuple[str, ...]


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    """Return an integer environment value, falling back to ``default`` when unset or malformed."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _csv_env(name: str, default: str) -> Tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings."""
    ttl = _int_env("TOKEN_TTL_MINUTES", None)
    page_size = _int_env("PAGE_SIZE", 15) or 15
    max_page_size = _int_env("MAX_PAGE_SIZE", 100) or 100
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        # 0 disables expiry the same way an unset value does
        token_ttl_minutes=ttl if ttl and ttl > 0 else None,
        page_size=min(page_size, max_page_size),
        max_page_size=max_page_size,
        argon2_time_cost=_int_env("ARGON2_TIME_COST", 2),
        argon2_memory_cost=_int_env("ARGON2_MEMORY_COST", 65536),
        argon2_parallelism=_int_env("ARGON2_PARALLELISM", 4),
        cors_origins=_csv_env("CORS_ORIGINS", "http://localhost,http://localhost:3000"),
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()


# Generate dynamically from individual components if DATABASE_URL is not provided
def get_database_url() -> str:
    """Return ``DATABASE_URL``, or build a PostgreSQL URL from the ``POSTGRES_*`` variables."""
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    db_user = os.getenv("POSTGRES_USER")
    db_password = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST")
    db_port = os.getenv("POSTGRES_PORT")
    db_name = os.getenv("POSTGRES_DB")

    if not all([db_user, db_password, db_host, db_port, db_name]):
        missing = []
        if not db_user: missing.append("POSTGRES_USER")
        if not db_password: missing.append("POSTGRES_PASSWORD")
        if not db_host: missing.append("POSTGRES_HOST")
        if not db_port: missing.append("POSTGRES_PORT")
        if not db_name: missing.append("POSTGRES_DB")
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"
