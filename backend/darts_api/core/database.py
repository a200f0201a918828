"""Database connection and session management using SQLAlchemy with async support.

The manager is created once by the application lifespan and kept on
``app.state``; request handlers reach it through :func:`get_db`.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from .config import Settings


class DatabaseManager:
    """Database connection and session manager."""

    def __init__(self, settings: Settings):
        """Initialize database manager with async engine."""
        self.database_url = settings.database_url

        self.engine = create_async_engine(
            self.database_url,
            echo=settings.debug,  # Enable SQL logging in debug mode
            future=True,
        )

        self.async_session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session with proper cleanup."""
        async with self.async_session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def close(self) -> None:
        """Close database connections."""
        await self.engine.dispose()


def get_db_manager(request: Request) -> DatabaseManager:
    """Return the database manager attached to the running application."""
    return request.app.state.db_manager


# Dependency for FastAPI routes
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting a database session."""
    async with get_db_manager(request).get_session() as session:
        yield session
