# keymantra/utils/db.py
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from keymantra.models.tables import Base
from keymantra.utils.config import settings
from keymantra.utils.logger import logger


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Creates the async engine for a URL such as `sqlite+aiosqlite:///./keymantra.db`."""
    return create_async_engine(make_url(database_url), echo=echo)


engine = build_engine(settings.database_url, settings.database_echo)

# Loaded objects stay readable after commit; services return them to the routers.
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def init_models(bind: AsyncEngine = engine) -> None:
    """Creates any missing tables."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Database ready at {make_url(settings.database_url).render_as_string(hide_password=True)}.")


async def close_engine(bind: AsyncEngine = engine) -> None:
    await bind.dispose()


async def get_db() -> AsyncIterator[AsyncSession]:
    """Request-scoped session; closed when the response is done."""
    async with AsyncSessionLocal() as session:
        yield session
