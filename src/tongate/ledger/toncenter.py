"""toncenter v2 JSON-RPC ledger client.

API docs: https://toncenter.com/api/v2/
Every call is a POST of ``{"id", "jsonrpc", "method", "params"}`` to the
``jsonRPC`` endpoint; responses are ``{"ok": true, "result": ...}`` or
``{"ok": false, "error": "...", "code": ...}``.
"""

import base64
import itertools
import logging
from typing import Any, Optional

import httpx

from tongate.address import LedgerAddress
from tongate.ledger.base import (
    LedgerClient,
    LedgerConnectionError,
    LedgerError,
    MasterchainInfo,
    RpcError,
    RpcTimeoutError,
    StackEntry,
)

logger = logging.getLogger(__name__)

TONCENTER_TESTNET = "https://testnet.toncenter.com/api/v2/jsonRPC"
TONCENTER_MAINNET = "https://toncenter.com/api/v2/jsonRPC"

DEFAULT_TIMEOUT = 60.0


class ToncenterClient(LedgerClient):
    """Ledger client backed by a toncenter HTTP API endpoint.

    One ``httpx.AsyncClient`` is created lazily and shared by all calls.
    """

    def __init__(
        self,
        endpoint: str = TONCENTER_TESTNET,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize toncenter client.

        Args:
            endpoint: JSON-RPC endpoint URL
            api_key: Optional API key (sent as X-API-Key)
            timeout: Timeout applied to every request, in seconds
            transport: Optional httpx transport (tests)
        """
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._ids = itertools.count(1)

    def _get_headers(self) -> dict:
        """Get API headers."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers=self._get_headers(),
                transport=self._transport,
            )
        return self._client

    async def _call(self, method: str, params: dict) -> Any:
        """Perform one JSON-RPC call and return its ``result``."""
        request = {
            "id": next(self._ids),
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
        }

        try:
            response = await self._get_client().post(self.endpoint, json=request)
        except httpx.TimeoutException as e:
            raise RpcTimeoutError(f"{method} timed out after {self.timeout:g}s") from e
        except httpx.HTTPError as e:
            raise RpcError(f"{method} failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            raise RpcError(
                f"{method} returned non-JSON response (HTTP {response.status_code})"
            ) from None

        if not isinstance(data, dict):
            raise RpcError(f"{method} returned unexpected payload: {data!r}")

        if not data.get("ok", False):
            error = data.get("error") or data.get("result") or "unknown error"
            code = data.get("code", response.status_code)
            raise RpcError(f"{method} rejected by toncenter ({code}): {error}")

        return data.get("result")

    async def connect(self) -> MasterchainInfo:
        """Fetch masterchain info to prove the endpoint is usable."""
        try:
            result = await self._call("getMasterchainInfo", {})
            last = result["last"]
            info = MasterchainInfo(
                seqno=int(last["seqno"]),
                workchain=int(last.get("workchain", -1)),
                shard=str(last.get("shard", "")),
            )
        except (LedgerError, KeyError, TypeError, ValueError) as e:
            raise LedgerConnectionError(f"Cannot connect to {self.endpoint}: {e}") from e

        logger.info(f"Connected to toncenter, latest masterchain seqno: {info.seqno}")
        return info

    async def invoke_getter(
        self, address: LedgerAddress, method: str, stack: list[StackEntry]
    ) -> list[StackEntry]:
        result = await self._call(
            "runGetMethod",
            {"address": address.to_string(), "method": method, "stack": stack},
        )

        if not isinstance(result, dict):
            raise RpcError(f"runGetMethod {method} returned unexpected result: {result!r}")

        exit_code = result.get("exit_code", 0)
        if exit_code not in (0, 1):
            raise RpcError(f"Get-method {method} on {address} exited with code {exit_code}")

        out = result.get("stack")
        if not isinstance(out, list):
            raise RpcError(f"runGetMethod {method} returned no stack")
        return out

    async def get_address_state(self, address: LedgerAddress) -> str:
        result = await self._call("getAddressState", {"address": address.to_string()})
        if not isinstance(result, str):
            raise RpcError(f"getAddressState returned unexpected result: {result!r}")
        return result

    async def send_boc(self, boc: bytes) -> None:
        await self._call("sendBoc", {"boc": base64.b64encode(boc).decode("ascii")})

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def __repr__(self) -> str:
        return f"ToncenterClient(endpoint={self.endpoint!r}, timeout={self.timeout:g})"
