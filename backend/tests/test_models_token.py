# backend/tests/test_models_token.py
from datetime import datetime, timezone

from userapi.models.token import Token


def test_token_model_exists():
    """Test Token model can be instantiated."""
    token = Token(
        user_id=1,
        token_hash="abc123def456",
        last_used_at=datetime.now(timezone.utc),
    )
    assert token.user_id == 1
    assert token.token_hash == "abc123def456"


def test_token_has_required_fields():
    """Test Token has all required fields."""
    assert hasattr(Token, "id")
    assert hasattr(Token, "user_id")
    assert hasattr(Token, "token_hash")
    assert hasattr(Token, "last_used_at")


def test_token_hash_is_unique():
    assert Token.__table__.c.token_hash.unique is True


def test_token_deleted_with_owner():
    (fk,) = Token.__table__.c.user_id.foreign_keys
    assert fk.column.table.name == "users"
    assert fk.ondelete == "CASCADE"


def test_last_used_at_is_indexed_for_sweeps():
    assert Token.__table__.c.last_used_at.index is True
