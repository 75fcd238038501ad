"""Shared fixtures for the spendwise test suite"""
import asyncio
from contextlib import asynccontextmanager
from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from spendwise.models.api import InsightRecord
from spendwise.models.base import Base
from spendwise.models.user import UserDB
from spendwise.models.insight import InsightDB  # noqa: F401


class ControlledCall:
    """Async callable that stays pending until the test resolves it"""

    def __init__(self):
        self.calls = []
        self.futures = []

    async def __call__(self, *args):
        self.calls.append(args)
        future = asyncio.get_running_loop().create_future()
        self.futures.append(future)
        return await future

    def resolve(self, index, value):
        self.futures[index].set_result(value)

    def fail(self, index, error):
        self.futures[index].set_exception(error)


@pytest.fixture
def controlled_call():
    return ControlledCall()


@pytest.fixture
def make_insight():
    """Factory for insight records"""
    def _make(
        id="1",
        category="tip",
        title="Save more",
        message="Put a little aside every payday.",
        action_label="See how",
        confidence=None
    ):
        return InsightRecord(
            id=id,
            category=category,
            title=title,
            message=message,
            action_label=action_label,
            confidence=confidence,
        )
    return _make


@pytest.fixture
def fixed_time():
    return datetime(2024, 3, 14, 15, 9, 26)


@pytest.fixture
def test_user():
    return UserDB(
        id="11111111-1111-1111-1111-111111111111",
        external_user_id="user_2abc",
        name="Ada Lovelace",
        image_url="https://img.example.com/ada.png",
        email="ada@example.com",
        created_at=datetime(2024, 1, 1, 9, 0, 0),
        updated_at=datetime(2024, 1, 1, 9, 0, 0),
    )


@asynccontextmanager
async def memory_session():
    """Fresh in-memory SQLite database with all tables"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with session_maker() as session:
            yield session
    finally:
        await engine.dispose()


@pytest.fixture
def memory_db():
    return memory_session
