"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes the FastAPI session dependency.
"""
import os
import sys
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storekeeper.utils.settings import get_database_url


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while a test runs, so also look for
    the pytest package in ``sys.modules`` (present once collection started).
    ``PYTEST_RUNNING=1`` forces the detection.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    if "pytest" in sys.modules:
        return True
    return False


# Test override strategy:
# 1. If STOREKEEPER_TEST_DB is set, use it.
# 2. Else if running under pytest, force in-memory sqlite.
# 3. Else use DATABASE_URL / POSTGRES_* settings.
explicit_test_db = os.getenv("STOREKEEPER_TEST_DB")
pytest_indicator = _is_pytest_runtime()

_memory_sqlite_kwargs = {
    "connect_args": {"check_same_thread": False},
    # StaticPool so the in-memory schema persists across connections
    "poolclass": StaticPool,
}

if explicit_test_db:
    DATABASE_URL = explicit_test_db
    _engine_kwargs = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
elif pytest_indicator:
    DATABASE_URL = "sqlite+pysqlite:///:memory:"
    _engine_kwargs = dict(_memory_sqlite_kwargs)
else:
    DATABASE_URL = get_database_url()
    _engine_kwargs = {"pool_pre_ping": True}


def _create_engine_with_fallback(url: str, kwargs: dict):
    """Create engine; under pytest without an explicit DB, fall back to in-memory sqlite."""
    try:
        return create_engine(url, **kwargs)
    except OperationalError:
        if _is_pytest_runtime() and not os.getenv("STOREKEEPER_TEST_DB"):
            return create_engine("sqlite+pysqlite:///:memory:", **_memory_sqlite_kwargs)
        raise


engine = _create_engine_with_fallback(DATABASE_URL, _engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# In-memory SQLite has no migrations applied; create the schema once on first use.
_SCHEMA_INIT_DONE = False


def _ensure_sqlite_schema():
    global _SCHEMA_INIT_DONE
    if _SCHEMA_INIT_DONE:
        return
    if str(engine.url).startswith("sqlite"):
        from storekeeper.db import models  # local import to avoid circular import at module load
        models.Base.metadata.create_all(bind=engine)
    _SCHEMA_INIT_DONE = True


def get_db():
    """Dependency to get a database session."""
    _ensure_sqlite_schema()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
