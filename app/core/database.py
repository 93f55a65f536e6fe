from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from fastapi import Request
from typing import AsyncGenerator

from app.core.config import Settings


class Base(DeclarativeBase):
    """Base model class"""


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured store"""

    url = settings.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")

    # SQLite engines use a single-connection pool without sizing options
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=settings.DEBUG)

    return create_async_engine(
        url,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        echo=settings.DEBUG,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to an engine"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency"""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database tables"""
    async with engine.begin() as conn:
        # Import all models here to ensure they are registered with SQLAlchemy
        from app.db import models  # noqa: F401

        # Create all tables
        await conn.run_sync(Base.metadata.create_all)
