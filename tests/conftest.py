"""Pytest configuration and fixtures."""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DRY_RUN"] = "true"
os.environ["KEEP_ALIVE_INTERVAL"] = "0"
os.environ.pop("MNEMONIC", None)
os.environ.pop("TONCENTER_KEY", None)

from tonsdk.crypto import mnemonic_new

from tongate.api.app import create_app
from tongate.config import Settings
from tongate.context import build_context
from tongate.ledger import DryRunLedgerClient
from tongate.signing import build_wallet_identity, derive_key_pair

CONTRACT_ADDRESS = "kQAQWKYnRVACaHUzNehchCZ2e7bOXDSrCNpoCEvr8773QB90"
USER_ADDRESS = "EQCxE6mUtQJKFnGfaROTKOt1lZbDiiX1kCixRv7Nw2Id_sDs"
RAW_USER_ADDRESS = "0:" + "ab" * 32


def make_settings(**overrides) -> Settings:
    """Settings isolated from the developer's .env file."""
    values = {
        "dry_run": True,
        "mnemonic": None,
        "contract_address": CONTRACT_ADDRESS,
        "keep_alive_interval": 0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="session")
def mnemonic_words() -> list[str]:
    """A freshly generated, valid 24-word TON mnemonic."""
    return mnemonic_new()


@pytest.fixture(scope="session")
def admin_identity(mnemonic_words):
    """Admin wallet identity derived from the test mnemonic."""
    return build_wallet_identity(derive_key_pair(mnemonic_words))


@pytest.fixture
def ledger() -> DryRunLedgerClient:
    """In-memory ledger double."""
    return DryRunLedgerClient()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def context(settings, ledger, admin_identity):
    """Gateway context with an admin identity configured."""
    return build_context(settings, ledger, admin_identity)


@pytest.fixture
def context_without_admin(settings, ledger):
    """Gateway context without a mnemonic."""
    return build_context(settings, ledger, None)


@pytest_asyncio.fixture
async def client(context):
    """Async test client for the gateway with an admin identity."""
    transport = ASGITransport(app=create_app(context))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def client_without_admin(context_without_admin):
    """Async test client for the gateway without a mnemonic."""
    transport = ASGITransport(app=create_app(context_without_admin))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
