"""
Wallet repository - the working wallet list.
"""

from typing import Iterable, List

from sondeur.domain.entities import Wallet
from sondeur.domain.exceptions import EntityNotFoundError
from sondeur.domain.services import IKeyValueStore
from sondeur.infrastructure.persistence.repositories._records import load_records

WALLETS_KEY = "wallet_generator_wallets"


class WalletRepository:
    """Current wallet list, stored as [{address, privateKey}, ...]."""

    def __init__(self, store: IKeyValueStore):
        self.store = store

    def load(self) -> List[Wallet]:
        return load_records(self.store, WALLETS_KEY, Wallet.from_dict)

    def save(self, wallets: Iterable[Wallet]) -> None:
        """Replace the whole list."""
        self.store.set(WALLETS_KEY, [w.to_dict() for w in wallets])

    def add(self, wallets: Iterable[Wallet]) -> int:
        """
        Append wallets, skipping addresses already present.

        Returns:
            Number of wallets actually added
        """
        current = self.load()
        seen = {w.normalized_address for w in current}
        added = 0
        for wallet in wallets:
            if wallet.normalized_address in seen:
                continue
            seen.add(wallet.normalized_address)
            current.append(wallet)
            added += 1
        self.save(current)
        return added

    def remove(self, index: int) -> Wallet:
        """
        Remove the wallet at a 0-based position.

        Raises:
            EntityNotFoundError: If index is out of range
        """
        current = self.load()
        if index < 0 or index >= len(current):
            raise EntityNotFoundError("Wallet", str(index))
        removed = current.pop(index)
        self.save(current)
        return removed

    def clear(self) -> None:
        self.store.delete(WALLETS_KEY)
