"""Keep-alive self ping.

Hosting platforms such as Render idle services that receive no traffic. A
background task requests our own /health endpoint at a fixed interval. Ping
failures are logged and never escalate.
"""

import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 30.0
PING_TIMEOUT = 10.0


class KeepAlive:
    """Periodic health prober."""

    def __init__(
        self,
        url: str,
        interval: float = DEFAULT_INTERVAL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize keep-alive prober.

        Args:
            url: Health endpoint to request
            interval: Seconds between pings
            transport: Optional httpx transport (tests)
        """
        self.url = url
        self.interval = interval
        self._transport = transport
        self._task: Optional[asyncio.Task] = None

    async def ping_once(self) -> bool:
        """Request the health endpoint once.

        Returns:
            True if the endpoint answered with a 2xx status
        """
        try:
            async with httpx.AsyncClient(
                timeout=PING_TIMEOUT, transport=self._transport
            ) as client:
                response = await client.get(self.url)
        except httpx.HTTPError as e:
            logger.error(f"Keep-alive ping failed: {e}")
            return False

        if response.is_success:
            logger.info(f"Keep-alive ping successful: {self.url}")
            return True

        logger.error(f"Keep-alive ping failed: HTTP {response.status_code} from {self.url}")
        return False

    async def run(self) -> None:
        """Ping forever, waiting ``interval`` seconds before each ping."""
        logger.info(f"Keep-alive started: {self.url} every {self.interval:g}s")
        while True:
            await asyncio.sleep(self.interval)
            await self.ping_once()

    def start(self) -> asyncio.Task:
        """Start the ping loop as a background task."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        """Cancel the ping loop."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Keep-alive stopped")
