import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from spendwise.core.config import settings

logger = logging.getLogger(__name__)

engine = None
async_session_maker = None


def create_engine_for(database_url: str) -> AsyncEngine:
    """SQLite shares one connection across tasks; PostgreSQL gets a checked pool"""
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=settings.DEBUG
        )

    from spendwise.core.database_url import rds_connect_args
    return create_async_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=300,
        echo=settings.DEBUG,
        connect_args=rds_connect_args()
    )


async def init_db(database_url: str = None):
    """Create the engine, the session maker and the users/insights tables"""
    global engine, async_session_maker

    from spendwise.core.database_url import get_database_url
    engine = create_engine_for(database_url or get_database_url())
    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    # Register tables on the metadata before create_all
    from spendwise.models.base import Base
    from spendwise.models.user import UserDB  # noqa: F401
    from spendwise.models.insight import InsightDB  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    global engine, async_session_maker
    if engine:
        await engine.dispose()
    engine = None
    async_session_maker = None


async def ensure_database():
    """Initialize on demand (startup may have failed); 503 when unreachable"""
    if engine is not None and async_session_maker is not None:
        return
    try:
        await init_db()
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection unavailable"
        )


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Session for work outside a request's get_db (panel loads, scripts)"""
    await ensure_database()
    async with async_session_maker() as session:
        yield session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session"""
    await ensure_database()
    async with async_session_maker() as session:
        yield session
