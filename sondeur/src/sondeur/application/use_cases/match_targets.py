"""
Match Targets use case.

Finds wallets whose address appears in a target address list.
"""

import logging
from typing import List, Optional, Sequence

from sondeur.application.services.result_aggregator import match_wallets
from sondeur.domain.entities import Wallet, WalletFileRecord, WalletFileType
from sondeur.infrastructure.files import default_export_name
from sondeur.infrastructure.persistence import WalletFileRepository

logger = logging.getLogger(__name__)


class MatchTargets:
    """Match wallets against targets and keep matches as a wallet file."""

    def __init__(self, wallet_files: Optional[WalletFileRepository] = None):
        self.wallet_files = wallet_files

    def execute(
        self,
        wallets: Sequence[Wallet],
        targets: Sequence[str],
        save: bool = True,
    ) -> List[Wallet]:
        """
        Args:
            wallets: Candidate wallets
            targets: Target addresses (any case)
            save: Store matches as a "matched" wallet file record

        Returns:
            Matching wallets in input order
        """
        matched = match_wallets(wallets, targets)
        for wallet in matched:
            logger.info(f"Match found: {wallet.address}")

        if matched and save and self.wallet_files is not None:
            self.wallet_files.add(
                WalletFileRecord(
                    name=default_export_name("expected_result"),
                    wallets=list(matched),
                    type=WalletFileType.MATCHED,
                )
            )
        return matched
