"""
Test infrastructure for the StudyHub API.

Strategy
--------
- SQLite in-memory via aiosqlite eliminates the need for a running Postgres
  instance in CI, keeping the suite fast and self-contained.
- StaticPool forces all async tasks to share the same in-memory database
  connection, which is required because SQLite in-memory databases are
  connection-scoped; a new connection would see an empty database.
- The app's get_db dependency is overridden so every test-time request uses
  the test session factory rather than the production one.
- All tables are created fresh before each test and dropped after, giving
  each test a clean isolated state.
- The Redis cache is disabled by setting cache._redis = None; the
  CacheManager treats that as a permanent miss, so tests exercise the real
  database path.  Cache tests opt in with the ``redis_cache`` fixture, which
  swaps in a fakeredis client.
- Users are read-only through the API, so HTTP tests create them with the
  ``make_user`` fixture, which commits directly through a session.
"""
import pytest
import pytest_asyncio
from fakeredis import aioredis as fake_aioredis
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from studyhub.cache import cache
from studyhub.database import Base, commit_session, get_db, rollback_session
from studyhub.main import app
from studyhub.middleware import install_query_counter
from studyhub.models import User

# ---------------------------------------------------------------------------
# Test database engine — SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency override — replace production get_db with the test session factory
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await commit_session(session)
        except Exception:
            await rollback_session(session)
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    cache._redis = None
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """Yield a live AsyncSession for service-level tests."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def make_user():
    """
    Return a coroutine that inserts and commits a user, yielding its id.

    Uses its own short-lived session so the row is visible to requests made
    through ``async_client``.
    """

    async def _make(name: str = "Test User", is_faculty: bool = False) -> int:
        async with async_session_test() as session:
            user = User(name=name, is_faculty=is_faculty)
            session.add(user)
            await session.commit()
            return user.id

    return _make


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def redis_cache():
    """Back the cache singleton with an in-process fakeredis for one test."""
    fake = fake_aioredis.FakeRedis(decode_responses=True)
    cache._redis = fake
    yield fake
    cache._redis = None
    await fake.flushall()
    await fake.aclose()
