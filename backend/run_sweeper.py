#!/usr/bin/env python3
"""Standalone token sweeper for running outside the API process."""
import asyncio
import signal

from userapi.core.config import settings
from userapi.core.logging import setup_logging
from userapi.services.auth.sweeper import TokenSweeper


async def main():
    setup_logging(settings.log_level, settings.log_format)
    sweeper = TokenSweeper()

    # Handle graceful shutdown
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, sweeper.stop)

    await sweeper.start()


if __name__ == "__main__":
    asyncio.run(main())
