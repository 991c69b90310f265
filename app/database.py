"""Database configuration and session management."""

import logging
from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from app.config import settings
from app.exceptions import PersistenceException

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def create_engine() -> AsyncEngine:
    """Create the async database engine."""
    engine_kwargs: dict[str, Any] = {
        "echo": settings.app_debug,
        "future": True,
    }

    # Use NullPool in development and for SQLite for easier debugging
    if settings.is_development or settings.is_sqlite:
        engine_kwargs["poolclass"] = NullPool
    else:
        engine_kwargs["pool_size"] = settings.database_pool_size
        engine_kwargs["max_overflow"] = settings.database_max_overflow
        engine_kwargs["pool_pre_ping"] = True

    return create_async_engine(settings.async_database_url, **engine_kwargs)


# Global engine instance
engine = create_engine()

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a database session."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


def dialect_name(db: AsyncSession) -> str:
    """Name of the SQL dialect the session is bound to."""
    return db.get_bind().dialect.name


async def upsert(
    db: AsyncSession,
    model: type[ModelT],
    values: dict[str, Any],
    conflict_columns: Iterable[str],
    update_columns: Iterable[str] | None = None,
) -> ModelT:
    """Insert a row or update it in place when the conflict target already exists.

    Runs a single ``INSERT ... ON CONFLICT (...) DO UPDATE ... RETURNING`` so the
    write is atomic at the row level and repeated calls with the same key
    replace the stored values instead of adding duplicates.

    Args:
        db: Session to execute on
        model: Mapped class of the target table
        values: Column values for the row, keyed by column name
        conflict_columns: Unique column set used as the conflict target
        update_columns: Columns to overwrite on conflict (defaults to every
            supplied column outside the conflict target)

    Returns:
        The inserted or updated ORM instance
    """
    dialect = dialect_name(db)
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise NotImplementedError(f"Upsert is not supported on {dialect}")

    conflict_columns = list(conflict_columns)
    if update_columns is None:
        update_columns = [c for c in values if c not in conflict_columns]

    stmt = insert(model).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=conflict_columns,
        set_={column: stmt.excluded[column] for column in update_columns},
    ).returning(model)

    result = await db.scalars(stmt, execution_options={"populate_existing": True})
    return result.one()


async def close_db() -> None:
    """Close database connections."""
    await engine.dispose()


@asynccontextmanager
async def store_errors(db: AsyncSession, message: str) -> AsyncGenerator[None, None]:
    """Translate database failures inside the block into PersistenceException.

    The failure is logged with ``message`` as context and the session is rolled
    back so the request can still respond. Application exceptions raised in the
    block pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as e:
        detail = str(getattr(e, "orig", None) or e)
        logger.error(f"{message}: {detail}")
        await db.rollback()
        raise PersistenceException(message, details=detail) from e
