import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookreview.core.exceptions import StoreError, UniqueViolationError

logger = logging.getLogger(__name__)


UNIQUE_VIOLATION_SQLSTATE = "23505"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_unique_violation(error: IntegrityError) -> bool:
    """Нарушен именно уникальный / первичный ключ, а не NOT NULL или CHECK"""
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    return "UNIQUE constraint failed" in str(orig)


@asynccontextmanager
async def store_errors(db: AsyncSession, action: str):
    """
    Откатывает транзакцию и переводит ошибки SQLAlchemy в ошибки хранилища.

    Нарушение уникальности -> UniqueViolationError, остальное -> StoreError.
    Исходное исключение доступно как __cause__.
    """
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"❌ IntegrityError on {action}: {e.orig}")
        if not is_unique_violation(e):
            raise StoreError(f"Failed to {action}: constraint violated") from e
        raise UniqueViolationError(f"Failed to {action}: key already exists") from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Store error on {action}: {e}")
        raise StoreError(f"Failed to {action}") from e
