# backend/tests/test_models_user.py
import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from userapi.models.user import User

from conftest import add_user


def test_user_has_required_fields():
    assert hasattr(User, "id")
    assert hasattr(User, "username")
    assert hasattr(User, "email")
    assert hasattr(User, "password")
    assert hasattr(User, "inactive")
    assert hasattr(User, "activation_token")
    assert hasattr(User, "password_reset_token")
    assert hasattr(User, "image")


def test_email_is_unique():
    assert User.__table__.c.email.unique is True


@pytest.mark.asyncio
async def test_new_user_is_inactive_by_default(session):
    """Accounts start inactive until activated."""
    session.add(User(username="user1", email="user1@mail.com", password="hash"))
    await session.commit()

    user = (await session.execute(select(User))).scalar_one()
    assert user.inactive is True
    assert isinstance(user.id, int)


@pytest.mark.asyncio
async def test_duplicate_email_rejected(session_factory, session):
    await add_user(session_factory)

    session.add(User(username="user2", email="user1@mail.com", password="hash"))
    with pytest.raises(IntegrityError):
        await session.commit()
