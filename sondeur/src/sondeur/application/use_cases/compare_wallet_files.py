"""
Compare Wallet Files use case.

Finds wallets present in every one of several wallet files.
"""

from typing import Dict, List, Mapping, Sequence

from sondeur.application.dto import CompareResult
from sondeur.domain.entities import Wallet
from sondeur.domain.exceptions import ValidationError

MIN_FILES = 2
MAX_FILES = 4


class CompareWalletFiles:
    """
    Compare wallet files by lower-cased address.

    The first file is the reference; its last wallet for an address wins.
    Empty files are ignored.
    """

    def execute(self, files: Mapping[str, Sequence[Wallet]]) -> List[CompareResult]:
        """
        Raises:
            ValidationError: Fewer than 2 non-empty files or more than 4
        """
        valid = {name: wallets for name, wallets in files.items() if wallets}
        if len(valid) < MIN_FILES:
            raise ValidationError(
                f"Load at least {MIN_FILES} non-empty wallet files to compare"
            )
        if len(valid) > MAX_FILES:
            raise ValidationError(f"At most {MAX_FILES} files can be compared")

        address_maps: List[Dict[str, Wallet]] = [
            {w.normalized_address: w for w in wallets} for wallets in valid.values()
        ]
        names = list(valid)

        return [
            CompareResult(wallet=wallet, found_in_files=list(names))
            for address, wallet in address_maps[0].items()
            if all(address in address_map for address_map in address_maps[1:])
        ]
