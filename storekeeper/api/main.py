"""
FastAPI app assembly: logging, middleware, exception handlers and router wiring.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storekeeper.api.auth import admin_auth_router, user_auth_router
from storekeeper.api.exception_handlers import setup_exception_handlers
from storekeeper.api.health import router as health_router
from storekeeper.api.items import router as items_router
from storekeeper.api.items import user_items_router
from storekeeper.api.storages import router as storages_router
from storekeeper.api.users import router as users_router
from storekeeper.utils.settings import get_settings

settings = get_settings()

# Configure logging
LOG_LEVEL = getattr(logging, settings.log_level, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", settings.log_level)

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Storekeeper",
    description="Two-realm CRUD API for users, their storages and the items kept in them.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

API_PREFIX = "/api"

# /users/auth/* and /users/items must be registered ahead of /users/{user_id}
app.include_router(admin_auth_router, prefix=API_PREFIX)
app.include_router(user_auth_router, prefix=API_PREFIX)
app.include_router(user_items_router, prefix=API_PREFIX)
app.include_router(users_router, prefix=API_PREFIX)
app.include_router(storages_router, prefix=API_PREFIX)
app.include_router(items_router, prefix=API_PREFIX)
app.include_router(health_router, prefix=API_PREFIX)
