"""Persistence for bearer tokens."""
from abc import ABC, abstractmethod
from datetime import datetime

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.models.token import Token


class TokenStore(ABC):
    """Abstract interface for token storage.

    Every mutation is a single conditional statement so that concurrent
    validations, revocations and sweeps never need an in-process lock.
    Implementations do not commit; the caller owns the transaction.
    """

    @abstractmethod
    async def add(self, token_hash: str, user_id: int, last_used_at: datetime) -> None:
        """Persist a new token record."""
        pass

    @abstractmethod
    async def touch(self, token_hash: str, now: datetime, not_before: datetime) -> int | None:
        """Refresh last_used_at if the token was used after not_before.

        Returns the owning user id, or None if no live token matched.
        """
        pass

    @abstractmethod
    async def delete(self, token_hash: str) -> int:
        """Delete one token. Returns the number of rows removed."""
        pass

    @abstractmethod
    async def delete_for_user(self, user_id: int) -> int:
        """Delete every token owned by a user."""
        pass

    @abstractmethod
    async def delete_unused_since(self, cutoff: datetime) -> int:
        """Delete every token whose last use is at or before cutoff."""
        pass


class SqlAlchemyTokenStore(TokenStore):
    """Token store on top of an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, token_hash: str, user_id: int, last_used_at: datetime) -> None:
        self.session.add(Token(token_hash=token_hash, user_id=user_id, last_used_at=last_used_at))
        await self.session.flush()

    async def touch(self, token_hash: str, now: datetime, not_before: datetime) -> int | None:
        result = await self.session.execute(
            update(Token)
            .where(Token.token_hash == token_hash, Token.last_used_at > not_before)
            .values(last_used_at=now)
            .returning(Token.user_id)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()

    async def delete(self, token_hash: str) -> int:
        result = await self.session.execute(
            delete(Token)
            .where(Token.token_hash == token_hash)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_for_user(self, user_id: int) -> int:
        result = await self.session.execute(
            delete(Token)
            .where(Token.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_unused_since(self, cutoff: datetime) -> int:
        result = await self.session.execute(
            delete(Token)
            .where(Token.last_used_at <= cutoff)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
