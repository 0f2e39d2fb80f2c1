"""
Test infrastructure for the Guest Book API.

Strategy
--------
- SQLite in-memory via aiosqlite stands in for the managed Postgres store.
  StaticPool makes every session share the one in-memory connection,
  which is required because SQLite in-memory databases are
  connection-scoped.
- The gateway under test is bound to that engine by injection, and the
  app is built around it with ``create_app(gateway=...)``; no global
  dependency overrides are needed.
- Tables are created before each test and dropped after.
- ``InMemoryCommentGateway`` is a fake with the same two operations,
  used where a test needs to count store calls or force store failures.
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import functions

from app.config import Settings
from app.database import Base
from app.errors import PersistenceError
from app.gateway import CommentGateway
from app.main import create_app
from app.models import Comment, gen_random_uuid

# ---------------------------------------------------------------------------
# Test database engine - SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# SQLite renderings of the store-side defaults.  CURRENT_TIMESTAMP only has
# whole seconds, so "now" is rendered with milliseconds.
@compiles(gen_random_uuid, "sqlite")
def _sqlite_gen_random_uuid(element, compiler, **kw):
    return "lower(hex(randomblob(16)))"


@compiles(functions.now, "sqlite")
def _sqlite_now(element, compiler, **kw):
    return "strftime('%Y-%m-%d %H:%M:%f', 'now')"


engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TEST_SETTINGS = Settings(
    DATABASE_URL=None,
    DATABASE_KEY=None,
    CORS_ORIGINS=["http://localhost:3000", "http://localhost:3001"],
    FRONTEND_URL="https://guestbook.example.com",
    _env_file=None,
)


# ---------------------------------------------------------------------------
# In-memory fake
# ---------------------------------------------------------------------------

class InMemoryCommentGateway:
    """Drop-in replacement for ``CommentGateway`` holding rows in a list."""

    def __init__(self) -> None:
        self.rows: list[Comment] = []
        self.insert_calls = 0
        self.fail_with: str | None = None
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    async def insert(self, name: str, message: str) -> Comment:
        self.insert_calls += 1
        if self.fail_with:
            raise PersistenceError(f"Failed to create comment: {self.fail_with}")
        self._clock += timedelta(seconds=1)
        row = Comment(id=uuid.uuid4(), name=name, message=message, created_at=self._clock)
        self.rows.append(row)
        return row

    async def list_all(self) -> list[Comment]:
        if self.fail_with:
            raise PersistenceError(f"Failed to fetch comments: {self.fail_with}")
        return sorted(self.rows, key=lambda c: c.created_at, reverse=True)

    async def dispose(self) -> None:
        pass


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def app_settings() -> Settings:
    return TEST_SETTINGS


@pytest.fixture
def gateway() -> CommentGateway:
    return CommentGateway(engine=engine_test)


@pytest.fixture
def fake_gateway() -> InMemoryCommentGateway:
    return InMemoryCommentGateway()


@pytest_asyncio.fixture
async def async_client(gateway: CommentGateway) -> AsyncClient:
    """httpx.AsyncClient wired to an app backed by the SQLite gateway."""
    app = create_app(settings=TEST_SETTINGS, gateway=gateway)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def fake_client(fake_gateway: InMemoryCommentGateway) -> AsyncClient:
    """httpx.AsyncClient wired to an app backed by the in-memory fake."""
    app = create_app(settings=TEST_SETTINGS, gateway=fake_gateway)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
