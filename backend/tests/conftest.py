"""Shared fixtures: in-memory SQLite storage, a controllable clock and an
API client wired to both."""
import os
import tempfile
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="userapi-test-")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from userapi.core.database import get_session
from userapi.core.deps import get_email_service, get_file_service
from userapi.core.security import hash_password
from userapi.main import create_app
from userapi.models import Base, User
from userapi.services.email.sender import EmailService
from userapi.services.files.storage import FileService

PASSWORD = "P4ssword"
# Argon2 is slow on purpose; hash the shared test password once
PASSWORD_HASH = hash_password(PASSWORD)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def naive_utc(dt: datetime) -> datetime:
    """SQLite hands back naive datetimes; compare everything as naive UTC."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enforce foreign keys (ON DELETE CASCADE) like PostgreSQL does
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def email_service():
    service = MagicMock(spec=EmailService)
    service.send_account_activation = AsyncMock()
    service.send_password_reset = AsyncMock()
    return service


@pytest.fixture
def file_service(tmp_path) -> FileService:
    service = FileService(upload_dir=tmp_path, profile_dir="profile")
    service.create_folders()
    return service


@pytest.fixture
def app(session_factory, email_service, file_service):
    app = create_app(session_factory)

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_file_service] = lambda: file_service
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def add_user(
    session_factory,
    username: str = "user1",
    email: str = "user1@mail.com",
    inactive: bool = False,
    **fields,
) -> User:
    """Insert a user with the shared test password."""
    async with session_factory() as session:
        user = User(
            username=username,
            email=email,
            password=PASSWORD_HASH,
            inactive=inactive,
            **fields,
        )
        session.add(user)
        await session.commit()
        return user
