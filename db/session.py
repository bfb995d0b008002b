from __future__ import annotations

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from core.settings import get_settings


settings = get_settings()

# NullPool in debug; pool sizing only applies to the default queue pool.
_pool_kwargs: dict[str, object] = (
    {"poolclass": NullPool}
    if settings.debug
    else {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
    }
)

# One engine per process; sessions are handed out per request through `get_db`.
engine = create_async_engine(
    settings.sqlalchemy_database_uri_async,
    echo=settings.db_echo,
    pool_pre_ping=True,
    **_pool_kwargs,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session
