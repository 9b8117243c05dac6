"""Database connection and session management.

Provides the async engine and the session factory the unit of work draws
one session per request from.

Following hexagonal architecture:
- This is an infrastructure concern
- Transaction boundaries belong to SqlAlchemyUnitOfWork, not to this class
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from conduit.infrastructure.persistence.base import BaseModel


class Database:
    """Database engine and session factory.

    Usage:
        db = Database("sqlite+aiosqlite:///./conduit.db")
        await db.create_all()
        uow = SqlAlchemyUnitOfWork(db.session_factory)
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 0,
    ) -> None:
        """Initialize database with connection parameters.

        Args:
            database_url: Async database URL (e.g., postgresql+asyncpg://...,
                sqlite+aiosqlite:///...).
            echo: If True, log all SQL statements.
            pool_size: Connections kept in the pool (ignored for SQLite).
            max_overflow: Overflow connections above pool_size (ignored for SQLite).
        """
        engine_kwargs: dict[str, object] = {"echo": echo, "pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["max_overflow"] = max_overflow
        self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)

        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        """Create all tables defined in the models.

        Warning: development/testing only.
        """
        # Register models on the metadata
        from conduit.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def close(self) -> None:
        """Close all database connections."""
        await self.engine.dispose()
