"""Database Lifecycle Management - Async Version"""

from sqlalchemy.ext.asyncio import AsyncEngine

from core.data.models import Base
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)


async def init_database(engine: AsyncEngine) -> None:
    """
    Initialize database.
    
    Creates all tables if they don't exist.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ Database initialized successfully")


async def drop_database(engine: AsyncEngine) -> None:
    """Drop all tables (tests and local resets)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close database connections."""
    await engine.dispose()
    logger.info("✅ Database connections closed")
