from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from neropage.platform.config import settings


def build_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(
        database_url,
        echo=False,
        future=True,
        pool_pre_ping=True,
    )


engine: Optional[AsyncEngine] = build_engine(settings.DATABASE_URL) if settings.DATABASE_URL else None
SessionLocal = (
    async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    if engine is not None
    else None
)


async def create_tables(target: AsyncEngine) -> None:
    # Import for side effects: every model registers itself on Base.metadata
    from neropage.platform.db import models  # noqa: F401
    from neropage.platform.db.base import Base

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
