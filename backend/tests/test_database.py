# backend/tests/test_database.py
import pytest
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.core.config import settings
from userapi.core.database import async_session_factory, engine, get_session


def test_engine_uses_configured_url():
    assert engine.url == make_url(settings.database_url)


def test_session_factory_keeps_objects_after_commit():
    """Handlers return ORM objects after committing."""
    assert async_session_factory.kw["expire_on_commit"] is False


@pytest.mark.asyncio
async def test_get_session_yields_async_session():
    async for session in get_session():
        assert isinstance(session, AsyncSession)
        break
