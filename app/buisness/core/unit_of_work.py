"""
Unit of work
One commit per public mutating operation; rollback and re-raise on failure.
"""

from contextlib import contextmanager
from app import db
from app.buisness.core.errors import LifecycleError
from app.logger import get_logger

logger = get_logger("asset_lifecycle.domain.core.unit_of_work")


@contextmanager
def unit_of_work(description: str):
    """
    Run the enclosed block as a single unit of work against the session.

    Domain errors are rolled back and re-raised unchanged; anything else is
    rolled back, logged as an error and re-raised.
    """
    try:
        yield db.session
        db.session.commit()
    except LifecycleError as e:
        db.session.rollback()
        logger.warning(f"{description} rejected: {e.message}")
        raise
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error during {description}: {e}", exc_info=True)
        raise
