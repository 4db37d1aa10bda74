"""
DTOs returned by the check and comparison use cases.
"""

from dataclasses import dataclass, field
from typing import List

from sondeur.application.services.batch_orchestrator import BatchRunResult
from sondeur.application.services.result_aggregator import UsageStatistics
from sondeur.domain.entities import Wallet, WalletBalanceReport, WalletUsageReport
from sondeur.domain.value_objects import ChainConfig


@dataclass
class BalanceCheckOutcome:
    """Balance run with one report per checked wallet."""

    run: BatchRunResult
    reports: List[WalletBalanceReport]
    chains: List[ChainConfig]

    @property
    def funded(self) -> List[WalletBalanceReport]:
        return [r for r in self.reports if r.has_balance]

    @property
    def cancelled(self) -> bool:
        return self.run.cancelled

    @property
    def indeterminate_count(self) -> int:
        return sum(1 for r in self.run.results if not r.resolved)


@dataclass
class UsageCheckOutcome:
    """Usage run over one or more wallet files."""

    run: BatchRunResult
    reports: List[WalletUsageReport]
    statistics: UsageStatistics

    @property
    def used(self) -> List[WalletUsageReport]:
        return [r for r in self.reports if r.is_used]

    @property
    def cancelled(self) -> bool:
        return self.run.cancelled


@dataclass
class CompareResult:
    """A wallet present in every compared file."""

    wallet: Wallet
    found_in_files: List[str] = field(default_factory=list)
