"""
Chain query client interface.

One call, one endpoint. Retry and fallback live above this layer.
"""

from abc import ABC, abstractmethod


class IChainQueryClient(ABC):
    """Abstract interface for single-endpoint JSON-RPC queries."""

    @abstractmethod
    async def query_balance(self, endpoint_url: str, address: str) -> str:
        """
        Query native balance with eth_getBalance.

        Args:
            endpoint_url: JSON-RPC endpoint
            address: 0x-prefixed wallet address

        Returns:
            Hex-encoded wei string exactly as returned by the node

        Raises:
            QueryFailedError: On any failure
        """

    @abstractmethod
    async def query_nonce(self, endpoint_url: str, address: str) -> int:
        """
        Query transaction count with eth_getTransactionCount.

        Returns:
            Nonce as a non-negative integer

        Raises:
            QueryFailedError: On any failure
        """

    async def close(self) -> None:
        """Release network resources."""
