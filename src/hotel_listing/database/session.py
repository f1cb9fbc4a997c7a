from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from hotel_listing.config.settings import get_settings
from .base import Base

settings = get_settings()


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    SQLite ships with foreign key enforcement off; turn it on for every new
    DBAPI connection so FK violations surface as IntegrityError like on Postgres.
    """
    if engine.url.get_backend_name() != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine: AsyncEngine = create_async_engine(
    settings.database_url,
    echo=settings.SQLALCHEMY_ECHO,
    pool_pre_ping=True,              # Enables connection health checks
)
enable_sqlite_foreign_keys(engine)

# expire_on_commit=False: repositories commit and then hand entities back to callers,
# which must still be able to read attributes without another round-trip.
AsyncSessionMaker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a request-scoped session and closes it afterwards.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    async with AsyncSessionMaker() as session:
        yield session


async def create_all(bind: AsyncEngine = engine) -> None:
    """Create any missing tables (used for local runs when DB_CREATE_ALL is set)."""
    # models must be imported so their tables are registered on Base.metadata
    from hotel_listing import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
