from userapi.services.auth.store import TokenStore, SqlAlchemyTokenStore
from userapi.services.auth.tokens import AuthenticatedIdentity, TokenService
from userapi.services.auth.sweeper import TokenSweeper

__all__ = [
    "TokenStore",
    "SqlAlchemyTokenStore",
    "AuthenticatedIdentity",
    "TokenService",
    "TokenSweeper",
]
