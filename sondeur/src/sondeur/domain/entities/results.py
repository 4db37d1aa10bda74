"""
Check result entities.

Results are created once per (wallet, chain) query and never mutated.
A result with resolved=False means every endpoint failed: it carries the
zero sentinel and never counts as a balance or usage hit.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional

from sondeur.domain.entities.wallet import Wallet


def parse_wei(value) -> int:
    """
    Parse a wei amount given as int, decimal string or 0x-hex string.

    Raises:
        ValueError: If value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid wei amount: {value!r}")
    if isinstance(value, int):
        amount = value
    else:
        text = str(value).strip()
        if text[:2].lower() == "0x":
            amount = int(text, 16)
        else:
            amount = int(text, 10)
    if amount < 0:
        raise ValueError(f"Negative wei amount: {value!r}")
    return amount


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class BalanceResult:
    """Native balance of one wallet on one chain."""

    wallet_address: str
    chain_id: str
    balance_wei: str
    symbol: str
    resolved: bool = True
    endpoint: Optional[str] = None

    @property
    def has_balance(self) -> bool:
        """True iff balance_wei is strictly greater than zero."""
        return parse_wei(self.balance_wei) > 0


@dataclass(frozen=True)
class UsageStatus:
    """Nonce and balance of one wallet on one chain."""

    wallet_address: str
    chain_id: str
    nonce: int
    balance_wei: str
    symbol: str
    resolved: bool = True

    @property
    def has_balance(self) -> bool:
        return parse_wei(self.balance_wei) > 0

    @property
    def has_transactions(self) -> bool:
        return self.nonce > 0

    @property
    def is_used(self) -> bool:
        """Wallet sent a transaction or holds funds."""
        return self.has_transactions or self.has_balance


@dataclass(frozen=True)
class WalletBalanceReport:
    """All chain balances of one wallet from a balance run."""

    wallet: Wallet
    balances: Dict[str, BalanceResult]
    checked_at: datetime = field(default_factory=_utcnow)

    @property
    def has_balance(self) -> bool:
        return any(result.has_balance for result in self.balances.values())

    @property
    def nonzero_balances(self) -> Dict[str, BalanceResult]:
        """Chain -> result for chains with a positive balance, in run order."""
        return {
            chain: result
            for chain, result in self.balances.items()
            if result.has_balance
        }


@dataclass(frozen=True)
class WalletUsageReport:
    """Usage statuses of one wallet from a usage run."""

    wallet: Wallet
    statuses: Dict[str, UsageStatus]
    file_name: str = ""
    checked_at: datetime = field(default_factory=_utcnow)

    @property
    def is_used(self) -> bool:
        return any(status.is_used for status in self.statuses.values())

    @property
    def max_nonce(self) -> int:
        return max((s.nonce for s in self.statuses.values()), default=0)
