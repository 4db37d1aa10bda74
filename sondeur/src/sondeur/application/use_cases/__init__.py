"""
Application use cases.
"""

from sondeur.application.use_cases.check_balances import CheckBalances
from sondeur.application.use_cases.check_usage import CheckUsage
from sondeur.application.use_cases.compare_wallet_files import CompareWalletFiles
from sondeur.application.use_cases.derive_wallet import DeriveWallets
from sondeur.application.use_cases.match_targets import MatchTargets

__all__ = [
    "CheckBalances",
    "CheckUsage",
    "CompareWalletFiles",
    "DeriveWallets",
    "MatchTargets",
]
