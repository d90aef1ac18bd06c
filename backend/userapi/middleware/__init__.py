from userapi.middleware.token_auth import TokenAuthenticationMiddleware, extract_bearer_token

__all__ = ["TokenAuthenticationMiddleware", "extract_bearer_token"]
