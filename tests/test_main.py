"""Tests for application startup."""

import pytest

from conftest import make_settings
from tongate import main as main_module
from tongate.ledger import DryRunLedgerClient


@pytest.fixture
def patch_startup(monkeypatch):
    """Start the application with the given settings and ledger."""

    def apply(settings, ledger):
        monkeypatch.setattr(main_module, "get_settings", lambda: settings)
        monkeypatch.setattr(main_module, "create_ledger_client", lambda s: ledger)
        return main_module.Application()

    return apply


class TestInitialize:
    """Tests for Application.initialize."""

    @pytest.mark.asyncio
    async def test_without_mnemonic(self, patch_startup):
        ledger = DryRunLedgerClient()
        app = patch_startup(make_settings(), ledger)

        context = await app.initialize()

        assert context.admin is None
        assert ledger.calls == ["connect"]

    @pytest.mark.asyncio
    async def test_with_mnemonic(self, patch_startup, mnemonic_words, admin_identity):
        settings = make_settings(mnemonic=" ".join(mnemonic_words))
        app = patch_startup(settings, DryRunLedgerClient())

        context = await app.initialize()

        assert context.admin.address == admin_identity.address


class TestStart:
    """Tests for Application.start."""

    @pytest.mark.asyncio
    async def test_unreachable_ledger_exits(self, patch_startup):
        app = patch_startup(make_settings(), DryRunLedgerClient(reachable=False))

        with pytest.raises(SystemExit) as exc:
            await app.start()

        assert exc.value.code == 1

    @pytest.mark.asyncio
    async def test_malformed_mnemonic_exits(self, patch_startup):
        app = patch_startup(make_settings(mnemonic="one two three"), DryRunLedgerClient())

        with pytest.raises(SystemExit) as exc:
            await app.start()

        assert exc.value.code == 1

    @pytest.mark.asyncio
    async def test_invalid_contract_address_exits(self, patch_startup):
        app = patch_startup(make_settings(contract_address="garbage"), DryRunLedgerClient())

        with pytest.raises(SystemExit) as exc:
            await app.start()

        assert exc.value.code == 1

    @pytest.mark.asyncio
    async def test_serves_after_initialization(self, patch_startup, monkeypatch):
        served = []

        async def fake_serve(self, sockets=None):
            served.append(self.config.port)

        monkeypatch.setattr(main_module.uvicorn.Server, "serve", fake_serve)
        app = patch_startup(make_settings(port=8123), DryRunLedgerClient())

        await app.start()

        assert served == [8123]
        assert app.context is not None

    def test_shutdown_before_start(self, patch_startup):
        app = patch_startup(make_settings(), DryRunLedgerClient())
        app.shutdown()
