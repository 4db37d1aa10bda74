"""
Check Balances use case.

Checks native balances of a wallet list on the selected chains.
"""

import logging
from typing import Mapping, Optional, Sequence

from sondeur.application.dto import BalanceCheckOutcome
from sondeur.application.services import (
    WORKER_PARTITION,
    BatchOrchestrator,
    CancellationToken,
    ChainChecker,
)
from sondeur.application.services.batch_orchestrator import ProgressCallback
from sondeur.application.services.result_aggregator import build_balance_reports
from sondeur.domain.entities import Wallet
from sondeur.domain.exceptions import ValidationError
from sondeur.infrastructure.blockchain import ChainRegistry

logger = logging.getLogger(__name__)


class CheckBalances:
    """
    Check balances use case.

    The worker_partition strategy only queries each chain's primary
    endpoint; the sequential strategy walks the full fallback list.
    """

    def __init__(
        self,
        chain_registry: ChainRegistry,
        checker: ChainChecker,
        orchestrator: BatchOrchestrator,
        default_strategy: str = "sequential",
    ):
        """
        Initialize use case.

        Args:
            chain_registry: Resolves chain ids to endpoints
            checker: Per-(wallet, chain) balance check
            orchestrator: Batch runner (worker count, delays)
            default_strategy: Strategy used when execute() gets none
        """
        self.chain_registry = chain_registry
        self.checker = checker
        self.orchestrator = orchestrator
        self.default_strategy = default_strategy

    async def execute(
        self,
        wallets: Sequence[Wallet],
        chain_ids: Sequence[str],
        primary_urls: Optional[Mapping[str, str]] = None,
        strategy: Optional[str] = None,
        cancel_token: Optional[CancellationToken] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BalanceCheckOutcome:
        """
        Check every wallet on every chain.

        Args:
            wallets: Wallets to check
            chain_ids: Chains in check order
            primary_urls: Chain id -> primary RPC URL for this run
            strategy: "sequential" or "worker_partition"
            cancel_token: Cooperative cancellation
            on_progress: Progress callback

        Returns:
            BalanceCheckOutcome with partial results when cancelled

        Raises:
            ValidationError: No wallets, no chains, bad worker count
        """
        if not wallets:
            raise ValidationError("Load at least one wallet to check")

        strategy = strategy or self.default_strategy
        chains = self.chain_registry.get_chains(chain_ids, primary_urls)
        for chain in chains:
            if not chain.is_checkable:
                logger.warning(f"No endpoints for chain {chain.id}; results will be indeterminate")

        run_chains = chains
        if strategy == WORKER_PARTITION:
            run_chains = [chain.primary_only() for chain in chains]

        run = await self.orchestrator.run(
            wallets,
            run_chains,
            self.checker.check_balance,
            strategy=strategy,
            cancel_token=cancel_token,
            on_progress=on_progress,
        )

        reports = build_balance_reports(wallets, run.results)
        funded = sum(1 for r in reports if r.has_balance)
        logger.info(f"Balance check: {funded}/{len(reports)} wallets hold funds")

        return BalanceCheckOutcome(run=run, reports=reports, chains=list(chains))
