"""
EVM JSON-RPC client.

Issues eth_getBalance / eth_getTransactionCount against one endpoint per
call with a shared, lazily created httpx client.
"""

import asyncio
from typing import Any, Optional

import httpx

from sondeur.domain.exceptions import QueryFailedError
from sondeur.domain.services import IChainQueryClient


class EvmRpcClient(IChainQueryClient):
    """
    JSON-RPC over HTTP POST.

    Design:
    - Client is lazily initialized on first use
    - Lock ensures single client per instance
    - Every failure surfaces as QueryFailedError
    """

    def __init__(
        self,
        timeout: float = 10.0,
        max_connections: int = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize RPC client.

        Args:
            timeout: Per-request timeout in seconds
            max_connections: Connection pool size
            transport: Optional transport (tests use httpx.MockTransport)
        """
        self.timeout = timeout
        self.max_connections = max_connections
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        timeout=self.timeout,
                        limits=httpx.Limits(
                            max_connections=self.max_connections,
                            max_keepalive_connections=self.max_connections,
                        ),
                        transport=self._transport,
                    )
        return self._client

    async def call(self, endpoint_url: str, method: str, params: list) -> Any:
        """
        Perform one JSON-RPC call and return its result field.

        Raises:
            QueryFailedError: Network error, timeout, non-2xx status,
                malformed body, JSON-RPC error or missing result
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": 1,
        }

        try:
            client = await self._ensure_client()
            response = await client.post(endpoint_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise QueryFailedError(
                f"Timeout calling {method}", endpoint_url, method,
                details={"error": str(e) or type(e).__name__},
            )
        except httpx.HTTPStatusError as e:
            raise QueryFailedError(
                f"HTTP {e.response.status_code} from endpoint",
                endpoint_url,
                method,
                details={"status_code": e.response.status_code},
            )
        except httpx.HTTPError as e:
            raise QueryFailedError(
                f"Network error calling {method}: {e}", endpoint_url, method
            )
        except ValueError as e:
            raise QueryFailedError(
                f"Invalid JSON response: {e}", endpoint_url, method
            )

        if not isinstance(data, dict):
            raise QueryFailedError("Response is not a JSON object", endpoint_url, method)

        if data.get("error") is not None:
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else error
            raise QueryFailedError(
                f"RPC error: {message}",
                endpoint_url,
                method,
                details={"rpc_error": error},
            )

        result = data.get("result")
        if result is None:
            raise QueryFailedError("Response has no result", endpoint_url, method)
        return result

    async def query_balance(self, endpoint_url: str, address: str) -> str:
        result = await self.call(endpoint_url, "eth_getBalance", [address, "latest"])
        if not isinstance(result, str) or not result.lower().startswith("0x"):
            raise QueryFailedError(
                f"Malformed balance: {result!r}", endpoint_url, "eth_getBalance"
            )
        try:
            int(result, 16)
        except ValueError:
            raise QueryFailedError(
                f"Malformed balance: {result!r}", endpoint_url, "eth_getBalance"
            )
        return result

    async def query_nonce(self, endpoint_url: str, address: str) -> int:
        method = "eth_getTransactionCount"
        result = await self.call(endpoint_url, method, [address, "latest"])
        try:
            return int(str(result), 16)
        except ValueError:
            raise QueryFailedError(
                f"Malformed nonce: {result!r}", endpoint_url, method
            )

    async def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
