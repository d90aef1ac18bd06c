# backend/userapi/services/auth/tokens.py
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError

from userapi.core.config import settings
from userapi.core.errors import StorageUnavailableError
from userapi.core.security import hash_token, random_token
from userapi.services.auth.store import TokenStore

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Request-scoped identity resolved from a valid bearer token."""
    user_id: int


class TokenService:
    """Issues, validates and revokes opaque bearer tokens.

    A token is valid while it exists and was last used less than
    ``expire_days`` ago. Every successful validation slides the window
    forward to a full ``expire_days`` from now. Unknown and expired tokens
    are reported identically (``None``) so callers cannot learn a token's
    lifetime.
    """

    def __init__(
        self,
        store: TokenStore,
        clock: Callable[[], datetime] = utcnow,
        expire_days: int | None = None,
    ):
        self.store = store
        self.clock = clock
        self.expire_days = expire_days if expire_days is not None else settings.token_expire_days

    @property
    def window(self) -> timedelta:
        return timedelta(days=self.expire_days)

    def cutoff(self, now: datetime) -> datetime:
        """Tokens last used at or before this instant are expired."""
        return now - self.window

    async def issue(self, user_id: int) -> str:
        """Create and persist a new token for a user.

        Raises StorageUnavailableError if the token could not be stored;
        a token is never handed out unless it was persisted.
        """
        token = random_token()
        try:
            await self.store.add(hash_token(token), user_id, self.clock())
        except SQLAlchemyError as e:
            logger.error(f"Failed to store token for user {user_id}: {e}")
            raise StorageUnavailableError() from e
        return token

    async def validate(self, token: str | None) -> AuthenticatedIdentity | None:
        """Resolve a token to its owner and refresh its last use."""
        if not token:
            return None

        now = self.clock()
        try:
            user_id = await self.store.touch(hash_token(token), now, self.cutoff(now))
        except SQLAlchemyError as e:
            logger.error(f"Token validation failed: {e}")
            raise StorageUnavailableError() from e

        if user_id is None:
            return None
        return AuthenticatedIdentity(user_id=user_id)

    async def revoke(self, token: str | None) -> None:
        """Delete a single token. No-op if it does not exist."""
        if not token:
            return
        try:
            await self.store.delete(hash_token(token))
        except SQLAlchemyError as e:
            raise StorageUnavailableError() from e

    async def revoke_all(self, user_id: int) -> int:
        """Delete every token owned by a user."""
        try:
            removed = await self.store.delete_for_user(user_id)
        except SQLAlchemyError as e:
            raise StorageUnavailableError() from e
        if removed:
            logger.info(f"Revoked {removed} tokens for user {user_id}")
        return removed

    async def sweep(self) -> int:
        """Delete every expired token. Returns the number removed."""
        try:
            return await self.store.delete_unused_since(self.cutoff(self.clock()))
        except SQLAlchemyError as e:
            raise StorageUnavailableError() from e
