"""
Check Usage use case.

Finds wallets that have sent transactions (nonce > 0) on one chain,
optionally also counting a positive balance as usage.
"""

import logging
from functools import partial
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from sondeur.application.dto import UsageCheckOutcome
from sondeur.application.services import (
    WORKER_PARTITION,
    BatchOrchestrator,
    CancellationToken,
    ChainChecker,
)
from sondeur.application.services.batch_orchestrator import ProgressCallback
from sondeur.application.services.result_aggregator import usage_statistics
from sondeur.domain.entities import UsageStatus, Wallet, WalletUsageReport
from sondeur.domain.exceptions import ValidationError
from sondeur.infrastructure.blockchain import ChainRegistry

logger = logging.getLogger(__name__)


class CheckUsage:
    """Usage check over wallet files, worker-partitioned on the primary RPC."""

    def __init__(
        self,
        chain_registry: ChainRegistry,
        checker: ChainChecker,
        orchestrator: BatchOrchestrator,
    ):
        self.chain_registry = chain_registry
        self.checker = checker
        self.orchestrator = orchestrator

    async def execute(
        self,
        files: Mapping[str, Sequence[Wallet]],
        chain_id: str,
        primary_url: Optional[str] = None,
        include_balance: bool = False,
        cancel_token: Optional[CancellationToken] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> UsageCheckOutcome:
        """
        Check usage of every wallet in every file.

        Args:
            files: File name -> wallets, in load order
            chain_id: Chain to query
            primary_url: Custom RPC for this run
            include_balance: Also query balances
            cancel_token: Cooperative cancellation
            on_progress: Progress callback

        Returns:
            UsageCheckOutcome (reports only for wallets actually checked)

        Raises:
            ValidationError: No wallets loaded
        """
        entries: List[Tuple[Wallet, str]] = [
            (wallet, name) for name, wallets in files.items() for wallet in wallets
        ]
        if not entries:
            raise ValidationError("Load at least one wallet file")

        chain = self.chain_registry.get_chain(chain_id, primary_url).primary_only()

        run = await self.orchestrator.run(
            [wallet for wallet, _ in entries],
            [chain],
            partial(self.checker.check_usage, include_balance=include_balance),
            strategy=WORKER_PARTITION,
            cancel_token=cancel_token,
            on_progress=on_progress,
        )

        by_address: Dict[str, Dict[str, UsageStatus]] = {}
        for status in run.results:
            by_address.setdefault(status.wallet_address.lower(), {})[
                status.chain_id
            ] = status

        reports = [
            WalletUsageReport(
                wallet=wallet,
                statuses=by_address[wallet.normalized_address],
                file_name=name,
            )
            for wallet, name in entries
            if wallet.normalized_address in by_address
        ]

        statistics = usage_statistics(run.results)
        logger.info(
            f"Usage check on {chain.id}: {statistics.used}/{statistics.total} used"
        )
        return UsageCheckOutcome(run=run, reports=reports, statistics=statistics)
