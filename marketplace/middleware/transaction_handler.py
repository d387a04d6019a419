from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from functools import wraps
import logging

from marketplace.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


def transactional(func):
    """
    Run a service method as one all-or-nothing unit of work.

    Commits on success, rolls back on any exception. Store failures are
    re-raised as StorageError; domain errors propagate unchanged.
    Usage: @transactional on service methods holding ``self.db``.
    """

    @wraps(func)
    def wrapper(self, *args, **kwargs):
        db: Session = self.db
        try:
            result = func(self, *args, **kwargs)
            db.commit()
            logger.debug(f"Transaction committed in {func.__name__}")
            return result
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Transaction failed in {func.__name__}: {e}", exc_info=True)
            raise StorageError() from e
        except Exception as e:
            db.rollback()
            logger.info(f"Transaction rolled back in {func.__name__}: {e}")
            raise

    return wrapper


def storage_guard(func):
    """Translate store failures of read-only methods into StorageError."""

    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Query failed in {func.__name__}: {e}", exc_info=True)
            raise StorageError() from e

    return wrapper
