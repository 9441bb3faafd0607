"""
Boundary between services and the store.

Raw SQLAlchemy errors never leave a service: unique-constraint violations are
reported as the validation message of the field that owns the constraint, and
anything else is logged and downgraded to ``UnexpectedError``.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storekeeper.errors import UnexpectedError, ValidationError
from storekeeper.utils.validation import taken_message

logger = logging.getLogger("storekeeper.services")


@contextmanager
def persisting(db: Session, action: str, *, unique_field: Optional[str] = None) -> Iterator[None]:
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        if unique_field is not None:
            # Lost a race against a concurrent writer after the pre-check passed
            logger.info("%s rejected by unique constraint on %s", action, unique_field)
            raise ValidationError(taken_message(unique_field)) from e
        logger.exception("%s failed with integrity error", action)
        raise UnexpectedError() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("%s failed", action)
        raise UnexpectedError() from e
