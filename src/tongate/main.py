"""Main entry point - connects to TON and runs the API."""

import asyncio
import logging
import signal
import sys
from typing import Optional

import uvicorn

from tongate.api.app import create_app
from tongate.config import ConfigurationError, get_settings
from tongate.context import GatewayContext, build_context
from tongate.keepalive import KeepAlive
from tongate.ledger import LedgerClient, LedgerConnectionError, create_ledger_client
from tongate.signing import load_admin_identity

logger = logging.getLogger(__name__)


class Application:
    """Main application: ledger connection, API server and keep-alive."""

    def __init__(self):
        self.settings = get_settings()
        self.ledger: Optional[LedgerClient] = None
        self.context: Optional[GatewayContext] = None
        self.keep_alive: Optional[KeepAlive] = None
        self._server: Optional[uvicorn.Server] = None

    def configure_logging(self):
        log_level = logging.DEBUG if self.settings.debug else logging.INFO
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    async def initialize(self) -> GatewayContext:
        """Connect to the ledger and derive the admin identity.

        Raises:
            LedgerConnectionError: If the RPC endpoint is unreachable
            ConfigurationError: If the mnemonic or contract settings are malformed
        """
        logger.info(f"Connecting to TON via {self.settings.toncenter_endpoint}...")
        self.ledger = create_ledger_client(self.settings)
        await self.ledger.connect()

        admin = load_admin_identity(self.settings)
        self.context = build_context(self.settings, self.ledger, admin)
        return self.context

    async def start(self):
        """Start all services. Exits the process if initialization fails."""
        self.configure_logging()
        logger.info("Starting tongate...")
        logger.info(f"Environment: {self.settings.environment}")

        try:
            context = await self.initialize()
        except LedgerConnectionError as e:
            logger.error(f"Failed to connect to TON: {e}")
            await self._cleanup()
            sys.exit(1)
        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
            await self._cleanup()
            sys.exit(1)

        app = create_app(context)
        config = uvicorn.Config(
            app,
            host=self.settings.api_host,
            port=self.settings.port,
            log_level="debug" if self.settings.debug else "info",
        )
        self._server = uvicorn.Server(config)

        if self.settings.keep_alive_interval > 0:
            self.keep_alive = KeepAlive(
                self.settings.keep_alive_url, self.settings.keep_alive_interval
            )
            self.keep_alive.start()

        logger.info(f"Server running on http://{self.settings.api_host}:{self.settings.port}")
        try:
            await self._server.serve()
        finally:
            await self._cleanup()

    async def _cleanup(self):
        """Cleanup resources."""
        logger.info("Cleaning up...")
        if self.keep_alive:
            await self.keep_alive.stop()
        if self.ledger:
            await self.ledger.close()
        logger.info("Cleanup complete")

    def shutdown(self):
        """Signal shutdown."""
        logger.info("Shutdown requested")
        if self._server is not None:
            self._server.should_exit = True


def main():
    """Main entry point."""
    app = Application()

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, app.shutdown)

    try:
        loop.run_until_complete(app.start())
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    finally:
        loop.close()


if __name__ == "__main__":
    main()
