"""
Shared plumbing for the SQLAlchemy-backed stores.

Stores never commit. They add, flush and query inside the
session they were given; the caller owns the transaction.
Every write goes through _flush or _execute, so a database
failure always surfaces as a BookkeepingError: ConflictError
when the caller named the constraint it expects to trip,
ConsistencyError otherwise.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bookkeeping.errors import ConflictError, ConsistencyError

logger = logging.getLogger(__name__)


class BaseStore:

    def __init__(self, db: Session):
        self.db = db

    def _translate(self, e: SQLAlchemyError, what: str, conflict: str | None):
        if conflict is not None and isinstance(e, IntegrityError):
            logger.warning("Rejected write of %s: %s", what, e.orig)
            return ConflictError(conflict)
        logger.error("Failed to write %s: %s", what, e)
        return ConsistencyError(f"Failed to write {what}")

    def _flush(self, what: str, conflict: str | None = None) -> None:
        """Flush pending writes, translating database failures."""
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise self._translate(e, what, conflict) from e

    def _execute(self, statement, what: str, conflict: str | None = None):
        """Run a bulk UPDATE/DELETE, translating database failures."""
        try:
            return self.db.execute(statement)
        except SQLAlchemyError as e:
            raise self._translate(e, what, conflict) from e
