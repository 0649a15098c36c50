import os

# Set env vars BEFORE any imports from the project happen
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test_catalog.db")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("CLOUD_NAME", "demo-cloud")
os.environ.setdefault("ENV", "testing")

from unittest.mock import AsyncMock, MagicMock

import pytest

from core.database import async_session, engine
from models import Base


@pytest.fixture
async def tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db(tables):
    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_get_db():
    """A stand-in for core.database.get_db usable with ``async with``."""
    session = AsyncMock()
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory
