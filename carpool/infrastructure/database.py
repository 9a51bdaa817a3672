"""
Async SQLAlchemy engine and session factory.

Uses ``aiosqlite`` by default so the collection is kept in a local file;
any async driver URL works through ``CARPOOL_DATABASE_URL``.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from carpool.config import settings

engine = create_async_engine(settings.database_url, echo=False)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create missing tables."""
    # Registers the models on ``Base.metadata``.
    from . import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
