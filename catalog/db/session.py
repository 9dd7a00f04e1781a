"""
Database session configuration.
"""

import os
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from catalog.core.config import settings

if "PYTEST_CURRENT_TEST" in os.environ:
    DATABASE_URL = os.getenv("TEST_DATABASE_URL") or str(settings.DATABASE_URI)
else:
    DATABASE_URL = str(settings.DATABASE_URI)

# Base class for all models
Base = declarative_base()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine, with pool sizing only where the dialect pools.
    """
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to ``bind``."""
    return async_sessionmaker(
        bind=bind,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
        class_=AsyncSession,
    )


engine = build_engine(DATABASE_URL, echo=settings.DEBUG)
async_session_factory = build_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session.

    Used for the health probe; catalog handlers go through ``CatalogStore``.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
