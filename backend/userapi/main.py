import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from userapi.core.config import settings
from userapi.core.database import async_session_factory
from userapi.core.deps import get_file_service
from userapi.core.errors import register_exception_handlers
from userapi.core.logging import setup_logging
from userapi.api.auth import router as auth_router
from userapi.api.users import router as users_router
from userapi.middleware.token_auth import TokenAuthenticationMiddleware
from userapi.services.auth.sweeper import TokenSweeper

logger = logging.getLogger(__name__)

ONE_YEAR_IN_SECONDS = 365 * 24 * 60 * 60
API_PREFIX = "/api/1.0"


class CachedStaticFiles(StaticFiles):
    """Static files served with a long-lived Cache-Control header."""

    def file_response(self, *args, **kwargs):
        response = super().file_response(*args, **kwargs)
        response.headers["Cache-Control"] = f"public, max-age={ONE_YEAR_IN_SECONDS}"
        return response


def create_app(
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        setup_logging(settings.log_level, settings.log_format)
        sweeper = TokenSweeper(session_factory)
        sweeper_task = asyncio.create_task(sweeper.start())
        app.state.token_sweeper = sweeper
        logger.info(f"{settings.app_name} started ({settings.environment})")
        yield
        # Shutdown - stop and wait
        sweeper.stop()
        try:
            await asyncio.wait_for(sweeper_task, timeout=10)
        except asyncio.TimeoutError:
            logger.warning("Token sweeper did not complete in time")

    app = FastAPI(
        title=settings.app_name,
        description="User account API with bearer token authentication",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(TokenAuthenticationMiddleware, session_factory=session_factory)

    files = get_file_service()
    files.create_folders()
    app.mount("/images", CachedStaticFiles(directory=files.profile_directory), name="images")

    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        return {
            "status": "healthy",
            "version": "0.1.0",
            "environment": settings.environment,
        }

    return app


app = create_app()
