from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from venuehub.config import settings

# Predictable constraint names, required for Alembic autogenerate to diff them.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_recycle=settings.db_pool_recycle,
    pool_pre_ping=settings.db_pool_pre_ping,
    echo=settings.db_echo,
    connect_args={"command_timeout": settings.db_statement_timeout},
)

# expire_on_commit=False: venues loaded before a write stay readable after the
# commit without lazy (sync) refreshes.
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a database session per request.

    Reads run inside the session's implicit transaction and are committed (a
    no-op for read-only work) when the request finishes. Writes open their
    own explicit scope with ``transaction()`` so each one is committed or
    rolled back where it happens.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Explicit write scope: commit when the block exits cleanly, roll back otherwise.

    Usage:
        async with transaction(db):
            await add_rating(db, rating)

    The exception is re-raised after the rollback; callers decide whether it
    becomes a failed OperationResult.
    """
    try:
        yield db
        await db.commit()
    except BaseException:
        await db.rollback()
        raise


async def shutdown() -> None:
    """Close all pooled connections. Called from the FastAPI lifespan."""
    await engine.dispose()
