"""
Core pytest configuration for the entire test suite.

Only database setup and logging live here. Domain fixtures (repositories,
seeded rows, the HTTP client) are in tests/fixtures/ and imported at the bottom
so they are globally available.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Keep this block above the project imports so model/metadata registration stays quiet.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy.pool import StaticPool

from hotel_listing.database.base import Base
from hotel_listing.database.session import enable_sqlite_foreign_keys
from hotel_listing import models  # noqa: F401 – registers tables on Base.metadata
from hotel_listing.config import get_settings
from hotel_listing.core.logging.builder import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Install the application's dictConfig once for the whole session."""
    setup_logging(settings)
    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------

IN_MEMORY_SQLITE = "sqlite+aiosqlite://"


def safe_log_db_url(db_url: str) -> str:
    """Database URL without credentials, for logging."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    1. `TEST_DATABASE_URL` environment variable (CI override)
    2. settings.TEST_DATABASE_URL when TESTING is on
    3. private in-memory SQLite
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    if settings.TESTING and settings.TEST_DATABASE_URL:
        return settings.TEST_DATABASE_URL
    return IN_MEMORY_SQLITE


TEST_DATABASE_URL = get_test_database_url()
logger.info("Using test DB: %s", safe_log_db_url(TEST_DATABASE_URL))


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


def _make_engine(url: str) -> AsyncEngine:
    if url == IN_MEMORY_SQLITE:
        # one shared connection, otherwise every checkout sees a fresh empty database
        return create_async_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(url, pool_pre_ping=True)


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh schema per test; dropped and disposed afterwards."""
    engine = _make_engine(TEST_DATABASE_URL)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # same flags as the application session maker
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """
    A session like the one a request gets. Repositories commit for real; isolation
    between tests comes from the per-test schema in `async_engine`.
    """
    async with session_maker() as session:
        yield session


# Repository and API fixtures
from .fixtures.repository_fixtures import (  # noqa: E402
    mapper,
    countries_repository,
    hotels_repository,
    create_country,
    create_hotel,
    seeded_countries,
    seeded_hotels,
)
from .fixtures.api_fixtures import app, client  # noqa: E402
