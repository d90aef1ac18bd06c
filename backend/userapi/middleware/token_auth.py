"""Bearer token authentication middleware.

Resolves ``Authorization: Bearer <token>`` on every request into
``request.state.identity`` (an AuthenticatedIdentity, or None for anonymous
requests). Missing, malformed, unknown and expired credentials all leave the
request anonymous; the middleware never rejects a request by itself.
Handlers decide whether an identity is required.

A valid token has its last-used time refreshed on every request, whatever
the route, in a short transaction committed before the handler runs.
"""

import logging

from fastapi import Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from userapi.core.database import async_session_factory
from userapi.core.errors import StorageUnavailableError, error_response
from userapi.core.logging import request_extra
from userapi.services.auth.store import SqlAlchemyTokenStore
from userapi.services.auth.tokens import TokenService

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the credential of a Bearer Authorization header, if any."""
    if not authorization:
        return None
    scheme, _, credential = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None
    credential = credential.strip()
    return credential or None


class TokenAuthenticationMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
    ):
        super().__init__(app)
        self.session_factory = session_factory

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.identity = None

        token = extract_bearer_token(request.headers.get("Authorization"))
        if token:
            try:
                async with self.session_factory() as session:
                    service = TokenService(SqlAlchemyTokenStore(session))
                    request.state.identity = await service.validate(token)
                    await session.commit()
            except (StorageUnavailableError, SQLAlchemyError) as e:
                logger.error(f"Token storage unavailable: {e}", extra=request_extra(request))
                return error_response(request, StorageUnavailableError())

            if request.state.identity is None:
                logger.debug("Unrecognised bearer token", extra=request_extra(request))

        return await call_next(request)
