"""Tests for the HTTP API."""

import pytest
from httpx import ASGITransport, AsyncClient

from conftest import CONTRACT_ADDRESS, USER_ADDRESS, make_settings
from tongate.address import parse_address
from tongate.api.app import create_app
from tongate.context import build_context
from tongate.ledger import RpcError
from tongate.payload import WithdrawRequest, decode_message

ALLOWED_ORIGIN = "https://clashwarriors.tech"


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    @pytest.mark.asyncio
    async def test_detailed_health(self, client):
        response = await client.get("/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "alive"
        assert data["admin_configured"] is True
        assert data["config"]["dry_run"] is True

    @pytest.mark.asyncio
    async def test_detailed_health_hides_mnemonic(self, ledger, admin_identity, mnemonic_words):
        settings = make_settings(mnemonic=" ".join(mnemonic_words), toncenter_key="sekrit-key")
        app = create_app(build_context(settings, ledger, admin_identity))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/health/detailed")

        assert response.status_code == 200
        assert response.json()["config"]["mnemonic"] == "***"
        assert "sekrit-key" not in response.text
        assert " ".join(mnemonic_words[:3]) not in response.text
        assert " ".join(mnemonic_words[-3:]) not in response.text


class TestBalanceEndpoint:
    """Tests for POST /balance."""

    @pytest.mark.asyncio
    async def test_balance(self, client, ledger):
        ledger.set_balance(parse_address(USER_ADDRESS), 42)

        response = await client.post("/balance", json={"wallet": USER_ADDRESS})

        assert response.status_code == 200
        assert response.json() == {"wallet": USER_ADDRESS, "amount": "42"}

    @pytest.mark.asyncio
    async def test_balance_is_exact(self, client, ledger):
        ledger.set_balance(parse_address(USER_ADDRESS), 2**100 + 1)

        response = await client.post("/balance", json={"wallet": USER_ADDRESS})

        assert response.json()["amount"] == str(2**100 + 1)

    @pytest.mark.asyncio
    async def test_wallet_required(self, client, ledger):
        response = await client.post("/balance", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Wallet required"}
        assert ledger.calls == []

    @pytest.mark.asyncio
    async def test_no_body(self, client):
        response = await client.post("/balance")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_rpc_failure_reports_zero(self, client, ledger):
        ledger.fail_with = RpcError("toncenter is down")

        response = await client.post("/balance", json={"wallet": USER_ADDRESS})

        assert response.status_code == 200
        assert response.json() == {"wallet": USER_ADDRESS, "amount": "0"}

    @pytest.mark.asyncio
    async def test_invalid_wallet_reports_zero(self, client):
        response = await client.post("/balance", json={"wallet": "garbage"})

        assert response.status_code == 200
        assert response.json()["amount"] == "0"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("wallet", [123, ["x"], {"a": 1}])
    async def test_wrongly_typed_wallet_reports_zero(self, client, wallet):
        response = await client.post("/balance", json={"wallet": wallet})

        assert response.status_code == 200
        assert response.json() == {"wallet": wallet, "amount": "0"}


class TestClaimAirdropEndpoint:
    """Tests for POST /claim-airdrop."""

    @pytest.mark.asyncio
    async def test_claim(self, client, ledger):
        response = await client.post("/claim-airdrop", json={"wallet": USER_ADDRESS})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert len(ledger.sent) == 1

    @pytest.mark.asyncio
    async def test_claim_twice_sends_twice(self, client, ledger):
        for _ in range(2):
            response = await client.post("/claim-airdrop", json={"wallet": USER_ADDRESS})
            assert response.status_code == 200

        assert len(ledger.sent) == 2

    @pytest.mark.asyncio
    async def test_wallet_required(self, client, ledger):
        response = await client.post("/claim-airdrop", json={"wallet": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Wallet required"}
        assert ledger.calls == []

    @pytest.mark.asyncio
    async def test_missing_mnemonic(self, client_without_admin, ledger):
        response = await client_without_admin.post(
            "/claim-airdrop", json={"wallet": USER_ADDRESS}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Server MNEMONIC missing"}
        assert ledger.calls == []

    @pytest.mark.asyncio
    async def test_invalid_wallet(self, client, ledger):
        response = await client.post("/claim-airdrop", json={"wallet": "garbage"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid wallet"
        assert ledger.sent == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("wallet", [123, ["x"], True])
    async def test_wrongly_typed_wallet(self, client, ledger, wallet):
        response = await client.post("/claim-airdrop", json={"wallet": wallet})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Invalid wallet"
        assert "must be a string" in data["details"]
        assert ledger.calls == []

    @pytest.mark.asyncio
    async def test_broadcast_failure(self, client, ledger):
        ledger.fail_with = RpcError("cannot apply external message")

        response = await client.post("/claim-airdrop", json={"wallet": USER_ADDRESS})

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Airdrop failed"
        assert "cannot apply external message" in data["details"]


class TestWithdrawPayloadEndpoint:
    """Tests for POST /withdraw-payload."""

    @pytest.mark.asyncio
    async def test_withdraw_payload(self, client, ledger):
        response = await client.post("/withdraw-payload", json={"amount": "12.5"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        tx = data["transaction"]
        assert tx["to"] == CONTRACT_ADDRESS
        assert tx["value"] == "500000000"
        assert decode_message(tx["payload"]) == WithdrawRequest(amount=12_500_000_000)
        assert ledger.calls == []

    @pytest.mark.asyncio
    async def test_numeric_amount(self, client):
        response = await client.post("/withdraw-payload", json={"amount": 12.5})

        assert response.status_code == 200
        payload = response.json()["transaction"]["payload"]
        assert decode_message(payload) == WithdrawRequest(amount=12_500_000_000)

    @pytest.mark.asyncio
    async def test_zero_amount(self, client):
        response = await client.post("/withdraw-payload", json={"amount": 0})

        assert response.status_code == 200
        payload = response.json()["transaction"]["payload"]
        assert decode_message(payload) == WithdrawRequest(amount=0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"amount": None}, {"amount": ""}])
    async def test_amount_required(self, client, body):
        response = await client.post("/withdraw-payload", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Amount required"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "amount",
        [
            "-1",
            "abc",
            "1.0000000001",
            "1_000",
            "1e3",
            pytest.param(True, id="bool"),
            pytest.param([1], id="list"),
        ],
    )
    async def test_invalid_amount(self, client, amount):
        response = await client.post("/withdraw-payload", json={"amount": amount})

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to generate payload"
        assert data["details"]


class TestMalformedRequests:
    """Tests for bodies that are not a JSON object."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/balance", "/claim-airdrop", "/withdraw-payload"])
    async def test_non_object_body(self, client, ledger, path):
        response = await client.post(path, json=[1, 2])

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"
        assert ledger.calls == []

    @pytest.mark.asyncio
    async def test_non_json_body(self, client):
        response = await client.post(
            "/withdraw-payload",
            content=b"amount=12.5",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"


class TestCors:
    """Tests for the origin allow-list."""

    @pytest.mark.asyncio
    async def test_allowed_origin(self, client):
        response = await client.get("/health", headers={"Origin": ALLOWED_ORIGIN})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.asyncio
    async def test_disallowed_origin(self, client, ledger):
        response = await client.post(
            "/balance",
            json={"wallet": USER_ADDRESS},
            headers={"Origin": "https://evil.example"},
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Not allowed by CORS"}
        assert ledger.calls == []

    @pytest.mark.asyncio
    async def test_no_origin(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    @pytest.mark.asyncio
    async def test_preflight(self, client):
        response = await client.options(
            "/claim-airdrop",
            headers={
                "Origin": "https://web.telegram.org",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://web.telegram.org"
        assert "POST" in response.headers["access-control-allow-methods"]

    @pytest.mark.asyncio
    async def test_configured_origins(self, ledger):
        settings = make_settings(allowed_origins="https://a.example, https://b.example/")
        app = create_app(build_context(settings, ledger))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            allowed = await ac.get("/health", headers={"Origin": "https://b.example"})
            blocked = await ac.get("/health", headers={"Origin": ALLOWED_ORIGIN})

        assert allowed.status_code == 200
        assert blocked.status_code == 403
