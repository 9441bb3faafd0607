"""
App assembly entry point.

Re-exports the FastAPI `app` from `storekeeper.api.main` so servers can be
pointed at ``app:app``.
"""

from storekeeper.api.main import app  # noqa: F401
