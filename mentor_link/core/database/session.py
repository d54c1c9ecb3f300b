"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from mentor_link.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the database.

    Creates missing tables from the entity metadata. In production the Alembic
    revision under ``alembic/versions`` is the source of truth for DDL; this is
    harmless there because ``create_all`` skips existing tables.
    """
    await create_all(engine)
