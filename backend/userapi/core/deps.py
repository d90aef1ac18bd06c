# backend/userapi/core/deps.py
from functools import lru_cache

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.core.config import settings
from userapi.core.database import get_session
from userapi.core.errors import ForbiddenError
from userapi.middleware.token_auth import extract_bearer_token
from userapi.services.auth.store import SqlAlchemyTokenStore
from userapi.services.auth.tokens import AuthenticatedIdentity, TokenService
from userapi.services.email.sender import EmailService
from userapi.services.files.storage import FileService
from userapi.services.users.service import UserService


@lru_cache
def get_email_service() -> EmailService:
    """Dependency for the email service."""
    return EmailService.from_settings()


@lru_cache
def get_file_service() -> FileService:
    """Dependency for profile image storage."""
    return FileService()


def get_token_service(db: AsyncSession = Depends(get_session)) -> TokenService:
    return TokenService(SqlAlchemyTokenStore(db))


def get_user_service(
    db: AsyncSession = Depends(get_session),
    tokens: TokenService = Depends(get_token_service),
    email: EmailService = Depends(get_email_service),
    files: FileService = Depends(get_file_service),
) -> UserService:
    return UserService(db, tokens, email, files)


async def get_identity(request: Request) -> AuthenticatedIdentity | None:
    """Identity attached by TokenAuthenticationMiddleware, None if anonymous."""
    return getattr(request.state, "identity", None)


async def get_bearer_token(request: Request) -> str | None:
    return extract_bearer_token(request.headers.get("Authorization"))


def require_owner(
    identity: AuthenticatedIdentity | None,
    owner_id: int,
    message_key: str = "unauthorised_user_update",
) -> None:
    """Raise ForbiddenError unless the caller is authenticated as owner_id."""
    if identity is None or identity.user_id != owner_id:
        raise ForbiddenError(message_key)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def get_pagination(
    page: str | None = Query(default=None),
    size: str | None = Query(default=None),
) -> tuple[int, int]:
    """Lenient paging: bad or missing values fall back to page 0 and the default size."""
    max_size = settings.default_page_size

    page_number = _parse_int(page)
    if page_number is None or page_number < 0:
        page_number = 0

    page_size = _parse_int(size)
    if page_size is None or page_size < 1 or page_size > max_size:
        page_size = max_size

    return page_number, page_size
