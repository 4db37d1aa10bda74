"""
Store-backed repositories.
"""

from sondeur.infrastructure.persistence.repositories.rpc_config_repository import (
    RPC_CONFIGS_KEY,
    RpcConfigRepository,
)
from sondeur.infrastructure.persistence.repositories.wallet_file_repository import (
    WALLET_FILES_KEY,
    WalletFileRepository,
)
from sondeur.infrastructure.persistence.repositories.wallet_repository import (
    WALLETS_KEY,
    WalletRepository,
)

__all__ = [
    "RPC_CONFIGS_KEY",
    "WALLETS_KEY",
    "WALLET_FILES_KEY",
    "RpcConfigRepository",
    "WalletFileRepository",
    "WalletRepository",
]
