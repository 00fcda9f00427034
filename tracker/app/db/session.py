"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support. SQLite (via aiosqlite) is the
default engine; any async driver SQLAlchemy supports can be configured
through ``DATABASE_URL``.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from tracker.app.core.config import settings


def build_engine(database_url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    """Create an async engine, applying pool sizing only where the dialect supports it."""
    if not database_url.startswith("sqlite"):
        kwargs.setdefault("pool_size", settings.db_pool_size)
        kwargs.setdefault("max_overflow", settings.db_max_overflow)
    return create_async_engine(database_url, echo=echo, future=True, **kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    """Session factory whose objects stay readable after commit."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# Create async engine
engine = build_engine(settings.database_url, echo=settings.db_echo)

# Create async session factory
AsyncSessionLocal = build_session_factory(engine)

# Create declarative base for models
Base = declarative_base()


async def init_db(bind: AsyncEngine = None) -> None:
    """Create the ``parcel`` table if it does not exist."""
    # Import models to ensure they are registered with Base
    from tracker.app.models.parcel import Parcel  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session_factory() -> async_sessionmaker:
    """
    FastAPI dependency for the session factory.

    The parcel store opens one short-lived session per operation, so the
    HTTP layer hands it the factory rather than a single session.
    """
    return AsyncSessionLocal
