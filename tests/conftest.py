"""
Test infrastructure for the Bloglist API.

Strategy
--------
- SQLite in-memory via aiosqlite stands in for Postgres.  StaticPool
  keeps every session on the one connection that owns the in-memory
  database.
- ``get_db`` is overridden so requests use the test session factory,
  and ``get_password_hasher`` is overridden with a 4-round bcrypt hasher
  to keep registration and login fast.
- Foreign keys are switched on for every connection, matching Postgres.
- Tables are created before and dropped after every test.
- Redis is disabled by nulling the cache client; the cache treats that
  as a permanent miss, so every read goes to the database.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEBUG", "false")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bloglist.cache import cache  # noqa: E402
from bloglist.database import Base, get_db  # noqa: E402
from bloglist.dependencies import get_password_hasher, get_token_service  # noqa: E402
from bloglist.main import app  # noqa: E402
from bloglist.middleware import install_query_counter  # noqa: E402
from bloglist.security import BcryptHasher  # noqa: E402

ROOT_CREDENTIALS = {"username": "root", "password": "sekret"}

engine_test = create_async_engine(
    "sqlite+aiosqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
install_query_counter(engine_test)


@event.listens_for(engine_test.sync_engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite leaves foreign keys off unless asked; Postgres always enforces them.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)

test_hasher = BcryptHasher(rounds=4)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_password_hasher] = lambda: test_hasher


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
    async with async_session_test() as session:
        yield session


@pytest.fixture
def hasher() -> BcryptHasher:
    return test_hasher


@pytest.fixture
def token_service():
    return get_token_service()


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def register_and_login(client: AsyncClient, username: str, password: str, name: str = "") -> str:
    """Create an account through the API and return a bearer token for it."""
    resp = await client.post("/api/users", json={"username": username, "name": name, "password": password})
    assert resp.status_code == 200, resp.text
    resp = await client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"bearer {token}"}


@pytest_asyncio.fixture
async def root_token(async_client: AsyncClient) -> str:
    return await register_and_login(async_client, name="Superuser", **ROOT_CREDENTIALS)
