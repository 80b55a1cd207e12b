# core/storage.py
"""
Transaction boundary helpers shared by the db_manager modules.
"""
from contextlib import asynccontextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger(__name__)


class StorageError(Exception):
    """Raised when the underlying store fails; the transaction was rolled back."""
    pass


@asynccontextmanager
async def unit_of_work(db: AsyncSession, operation: str):
    """
    Run the enclosed statements as one transaction and commit at the end.

    Any SQLAlchemy error rolls everything back and is re-raised as
    StorageError. Domain exceptions raised inside the block also roll back
    and propagate unchanged.
    """
    try:
        yield db
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("storage_operation_failed", operation=operation)
        raise StorageError(f"Storage operation failed: {operation}") from exc
    except Exception:
        await db.rollback()
        raise
