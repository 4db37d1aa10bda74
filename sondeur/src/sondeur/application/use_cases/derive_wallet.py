"""
Derive Wallet use case.
"""

from typing import List, Sequence

from sondeur.domain.entities import Wallet
from sondeur.infrastructure.blockchain import derive_wallet
from sondeur.infrastructure.persistence import WalletRepository


class DeriveWallets:
    """Derive addresses from private keys, optionally keeping them."""

    def __init__(self, wallet_repository: WalletRepository):
        self.wallet_repository = wallet_repository

    def execute(self, private_keys: Sequence[str], save: bool = False) -> List[Wallet]:
        """
        Raises:
            ValidationError: On the first invalid key (nothing is saved)
        """
        wallets = [derive_wallet(key) for key in private_keys]
        if save:
            self.wallet_repository.add(wallets)
        return wallets
