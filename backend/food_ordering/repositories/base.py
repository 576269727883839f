"""
Shared helpers for repositories
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Table, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from food_ordering.core.exceptions import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_operation(description: str, log: logging.Logger = logger) -> Iterator[None]:
    """
    Wrap SQLAlchemy errors raised in the block as StorageError

    The underlying exception is logged with its traceback and chained;
    callers only see the operation description.

    Example:
        with storage_operation("failed to fetch products"):
            rows = session.execute(select(Product)).scalars().all()
    """
    try:
        yield
    except SQLAlchemyError as e:
        log.exception(description)
        raise StorageError(description) from e


def insert_link(session: Session, table: Table, **keys) -> bool:
    """
    Insert a join-table row unless one with the same composite key exists

    Args:
        session: Active session (the caller owns the transaction)
        table: Join table whose primary key is exactly the given columns
        **keys: Column values, e.g. coupon_id=1, source_id=2

    Returns:
        True if a row was inserted, False if it was already present
    """
    conditions = [table.c[name] == value for name, value in keys.items()]
    exists = session.execute(select(*table.primary_key.columns).where(*conditions)).first()
    if exists:
        return False

    session.execute(insert(table).values(**keys))
    return True
