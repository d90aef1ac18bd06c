"""Scheduler for periodic removal of expired tokens."""
import asyncio
import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from userapi.core.config import settings
from userapi.core.database import async_session_factory
from userapi.services.auth.store import SqlAlchemyTokenStore
from userapi.services.auth.tokens import TokenService, utcnow

logger = logging.getLogger(__name__)


class TokenSweeper:
    """Long-lived task that deletes expired tokens on a fixed interval."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
        interval_seconds: float | None = None,
        clock: Callable = utcnow,
    ):
        self.session_factory = session_factory
        self.interval_seconds = (
            interval_seconds if interval_seconds is not None
            else settings.token_sweep_interval_minutes * 60
        )
        self.clock = clock
        self.running = False
        self._stop_event = asyncio.Event()

    async def start(self) -> None:
        """Run the sweep loop until stop() is called."""
        if self._stop_event.is_set():
            # stop() already requested before the task got scheduled
            return
        self.running = True
        logger.info(f"Token sweeper started (interval: {self.interval_seconds} seconds)")

        while self.running:
            # Wait first: the interval elapses before the first sweep
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

            if not self.running:
                break

            try:
                await self.run_once()
            except Exception as e:
                logger.exception(f"Error in token sweep: {e}")

        logger.info("Token sweeper loop exited")

    async def run_once(self) -> int:
        """Sweep expired tokens in a transaction of its own."""
        async with self.session_factory() as session:
            service = TokenService(SqlAlchemyTokenStore(session), clock=self.clock)
            removed = await service.sweep()
            await session.commit()

        if removed:
            logger.info(f"Swept {removed} expired tokens")
        return removed

    def stop(self) -> None:
        """Signal the sweep loop to exit."""
        self.running = False
        self._stop_event.set()
        logger.info("Token sweeper stopped")
