"""
Chain checker - one (wallet, chain) check with endpoint fallback.

Failures never escape as exceptions: when every endpoint fails on every
attempt the result carries the zero sentinel with resolved=False.
"""

import logging
from dataclasses import replace
from typing import Optional

from shared.resilience import EndpointFallback, FallbackExhaustedError, RetryConfig

from sondeur.domain.entities import BalanceResult, UsageStatus, Wallet
from sondeur.domain.exceptions import QueryFailedError
from sondeur.domain.services import IChainQueryClient
from sondeur.domain.value_objects import ChainConfig

logger = logging.getLogger(__name__)

ZERO_WEI = "0"


class ChainChecker:
    """Balance and nonce checks over a chain's ordered endpoints."""

    def __init__(
        self,
        client: IChainQueryClient,
        retry_config: Optional[RetryConfig] = None,
        fallback: Optional[EndpointFallback] = None,
    ):
        """
        Initialize checker.

        Args:
            client: Single-endpoint JSON-RPC client
            retry_config: Rounds and backoff (retry_on is forced to
                QueryFailedError so programming errors still surface)
            fallback: Prebuilt policy (tests inject one with a no-op sleep)
        """
        self.client = client
        if fallback is None:
            config = replace(
                retry_config or RetryConfig(max_attempts=3, initial_delay=1.0),
                retry_on=(QueryFailedError,),
            )
            fallback = EndpointFallback(config, name="rpc-fallback")
        self.fallback = fallback

    async def check_balance(self, wallet: Wallet, chain: ChainConfig) -> BalanceResult:
        """Native balance of wallet on chain, as a decimal wei string."""
        try:
            outcome = await self.fallback.execute_async(
                self.client.query_balance, chain.endpoints, wallet.address
            )
        except FallbackExhaustedError as e:
            logger.warning(
                f"Balance of {wallet.truncated()} on {chain.id} is indeterminate: "
                f"{e.message}"
            )
            return BalanceResult(
                wallet_address=wallet.address,
                chain_id=chain.id,
                balance_wei=ZERO_WEI,
                symbol=chain.symbol,
                resolved=False,
            )

        return BalanceResult(
            wallet_address=wallet.address,
            chain_id=chain.id,
            balance_wei=str(int(outcome.value, 16)),
            symbol=chain.symbol,
            endpoint=outcome.endpoint,
        )

    async def check_nonce(self, wallet: Wallet, chain: ChainConfig) -> Optional[int]:
        """Transaction count, or None when every endpoint failed."""
        try:
            outcome = await self.fallback.execute_async(
                self.client.query_nonce, chain.endpoints, wallet.address
            )
        except FallbackExhaustedError as e:
            logger.warning(
                f"Nonce of {wallet.truncated()} on {chain.id} is indeterminate: "
                f"{e.message}"
            )
            return None
        return outcome.value

    async def check_usage(
        self, wallet: Wallet, chain: ChainConfig, include_balance: bool = False
    ) -> UsageStatus:
        """
        Nonce (and optionally balance) of wallet on chain.

        Without include_balance the balance is reported as zero and only
        the nonce decides whether the wallet is used.
        """
        nonce = await self.check_nonce(wallet, chain)
        resolved = nonce is not None

        balance_wei = ZERO_WEI
        if include_balance:
            balance = await self.check_balance(wallet, chain)
            balance_wei = balance.balance_wei
            resolved = resolved and balance.resolved

        return UsageStatus(
            wallet_address=wallet.address,
            chain_id=chain.id,
            nonce=nonce or 0,
            balance_wei=balance_wei,
            symbol=chain.symbol,
            resolved=resolved,
        )
