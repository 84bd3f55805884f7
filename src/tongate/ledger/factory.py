"""Ledger client factory.

Creates the appropriate ledger client based on configuration.
"""

import logging

from tongate.config import Settings
from tongate.ledger.base import LedgerClient
from tongate.ledger.dryrun import DryRunLedgerClient
from tongate.ledger.toncenter import ToncenterClient

logger = logging.getLogger(__name__)


def create_ledger_client(settings: Settings) -> LedgerClient:
    """Create the ledger client for the configured mode."""
    if settings.dry_run:
        logger.warning("DRY_RUN enabled - transactions will NOT be broadcast")
        return DryRunLedgerClient()

    if not settings.toncenter_key:
        logger.warning("TONCENTER_KEY not set - toncenter rate limits apply")

    logger.info(f"Initializing toncenter client: {settings.toncenter_endpoint}")
    return ToncenterClient(
        endpoint=settings.toncenter_endpoint,
        api_key=settings.toncenter_key,
        timeout=settings.rpc_timeout,
    )
