from contextlib import contextmanager

from core.errors import ConflictError, MarketplaceError, StorageError
from core.imports import IntegrityError, SQLAlchemyError, logging

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(session):
    """Commit everything done inside the block, or nothing at all.

    Domain errors roll back and propagate unchanged. Integrity violations
    become ``ConflictError``; any other database failure becomes
    ``StorageError``.
    """
    try:
        yield session
        session.commit()
    except MarketplaceError:
        session.rollback()
        raise
    except IntegrityError as exc:
        session.rollback()
        logger.warning("Integrity violation, transaction rolled back: %s", exc.orig)
        raise ConflictError("Record conflicts with existing data") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Database failure, transaction rolled back")
        raise StorageError("Database error, changes were not saved") from exc
    except Exception:
        session.rollback()
        raise
