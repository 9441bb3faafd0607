"""
Health endpoint (public).
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storekeeper.api.responses import envelope, failure
from storekeeper.db.database import get_db

logger = logging.getLogger("storekeeper.health")

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Health check failed: %s", e)
        return failure(503, "Database unavailable")
    return envelope({"status": "ok"})
