"""Async engine and session factory shared by the workflow store and the
execution log sink."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.config import Settings, get_settings


def create_db_engine(settings: Settings, database_url: Optional[str] = None) -> AsyncEngine:
    """Build the async engine. SQLite URLs skip the connection pool options."""
    url = database_url or settings.DATABASE_URL
    options: dict = {"echo": settings.SQLALCHEMY_ECHO}
    if not url.startswith("sqlite"):
        options.update(
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
    return create_async_engine(url, **options)


def create_session_factory(db_engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = create_db_engine(get_settings())
AsyncSessionLocal = create_session_factory(engine)


async def init_db(db_engine: Optional[AsyncEngine] = None) -> None:
    """Create the workflow, template and execution tables if missing."""
    from db.base import Base
    import db.models  # noqa: F401  registers the mapped classes

    async with (db_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(db_engine: Optional[AsyncEngine] = None) -> None:
    await (db_engine or engine).dispose()
