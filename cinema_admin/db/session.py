from typing import AsyncGenerator
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from cinema_admin.core.config import Settings
from cinema_admin.db.base import Base


def build_engine(settings: Settings) -> AsyncEngine:
    options = {"echo": settings.DB_ECHO, "future": True}
    if not settings.DATABASE_URL.startswith("sqlite"):
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=30,
            # Recycle every hour (prevents stale connections)
            pool_recycle=3600,
            pool_pre_ping=True,
        )
    return create_async_engine(settings.DATABASE_URL, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False
    )


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async DB session from the factory
    built at startup and ensures it's closed after the request.
    """
    async with request.app.state.session_factory() as session:
        yield session
        await session.rollback()


async def init_db(engine: AsyncEngine) -> None:
    """
    Create all tables based on models.
    """
    # models must be registered on the metadata before create_all
    import cinema_admin.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
