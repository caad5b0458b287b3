"""
Database configuration.

Async engine and session factory for the snapshot store.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config.settings import settings
from app.models.base import Base


def create_engine(url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """Create async engine (defaults from settings)."""
    return create_async_engine(
        url or settings.database_url,
        echo=settings.database_echo if echo is None else echo,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session maker bound to engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Ready-to-use instances
engine = create_engine()
async_session_maker = create_session_maker(engine)
