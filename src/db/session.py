"""Async engine, session factory, and the per-request session dependency."""
import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import get_settings
from models import Base

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def create_tables() -> None:
    """Create the users and bookmarks tables if they don't exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close all pooled connections."""
    await engine.dispose()
    logger.info("Database engine disposed")


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield the session that forms one request's unit of work.

    The registrar and bookmark services only flush; the single commit happens
    here once the endpoint returns. An exception anywhere in the request
    rolls back the registration and the bookmark change together.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
