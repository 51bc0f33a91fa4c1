from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from school_admin.core.config import settings
from school_admin.core.logging import logger
from school_admin.models import Base


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.endswith("://"))


def create_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """
    Create an async engine for the configured database.

    In-memory SQLite lives inside a single connection, so it is pinned to
    one shared connection for the lifetime of the engine.
    """
    url = url or settings.DATABASE_URL
    echo = settings.DATABASE_ECHO if echo is None else echo

    if _is_memory_sqlite(url):
        return create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)

    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,        # Connection health check
        pool_size=20,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,         # Recycle connections after 30 minutes
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,    # Don't expire objects after commit
        autoflush=False
    )


@asynccontextmanager
async def session_scope(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for one unit of work.
    Usage: async with session_scope(factory) as session:
    """
    session = session_factory()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


# Database initialization functions
async def init_db(engine: AsyncEngine) -> None:
    """Create database tables that do not exist yet"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")


async def close_db(engine: AsyncEngine) -> None:
    """Close database connections"""
    await engine.dispose()
