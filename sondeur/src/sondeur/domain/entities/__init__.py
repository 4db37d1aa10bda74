"""
Domain entities.
"""

from sondeur.domain.entities.results import (
    BalanceResult,
    UsageStatus,
    WalletBalanceReport,
    WalletUsageReport,
    parse_wei,
)
from sondeur.domain.entities.wallet import Wallet, is_valid_address
from sondeur.domain.entities.wallet_file import WalletFileRecord, WalletFileType

__all__ = [
    "Wallet",
    "is_valid_address",
    "BalanceResult",
    "UsageStatus",
    "WalletBalanceReport",
    "WalletUsageReport",
    "parse_wei",
    "WalletFileRecord",
    "WalletFileType",
]
