import logging

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from studyhub.cache import cache
from studyhub.config import settings
from studyhub.middleware import install_query_counter

logger = logging.getLogger(__name__)

# Module-level engine variable allows tests to override with a test engine.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

# Register the per-request SQL query counter on the production engine.
install_query_counter(engine)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def init_models() -> None:
    """Create any missing tables.  ``create_all`` skips tables that exist."""
    import studyhub.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


async def commit_session(session: AsyncSession) -> None:
    """Commit, then drop the cache keys the transaction made stale."""
    await session.commit()
    await cache.drop_stale(session)


async def rollback_session(session: AsyncSession) -> None:
    await session.rollback()
    cache.discard_stale(session)


async def get_db():
    """
    Yield the persistence gateway for one request.

    The session is the only handle services touch; committing here keeps
    the transaction boundary in the router layer.
    """
    async with async_session() as session:
        try:
            yield session
            await commit_session(session)
        except Exception:
            await rollback_session(session)
            raise
