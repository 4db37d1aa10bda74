"""
Unit tests for MatchTargets.

Usage:
    python sondeur/tests/unit/application/use_cases/test_match_targets.py
    pytest sondeur/tests/unit/application/use_cases/test_match_targets.py
"""

from shared.tests import LaborantTest

from sondeur.application.use_cases import MatchTargets
from sondeur.domain.entities import Wallet, WalletFileType
from sondeur.infrastructure.persistence import (
    InMemoryKeyValueStore,
    WalletFileRepository,
)

HIT = Wallet(address="0x" + "Ab" * 20, private_key="0x" + "11" * 32)
MISS = Wallet(address="0x" + "cd" * 20, private_key="0x" + "22" * 32)


class TestMatchTargets(LaborantTest):
    """Unit tests for MatchTargets use case."""

    component_name = "sondeur"
    test_category = "unit"

    def setup_test(self):
        self.files = WalletFileRepository(InMemoryKeyValueStore())
        self.use_case = MatchTargets(self.files)

    def test_match_and_save(self):
        """Test matches are returned and saved as a matched record."""
        matched = self.use_case.execute([MISS, HIT], ["0x" + "ab" * 20])

        assert matched == [HIT]
        records = self.files.list()
        assert len(records) == 1
        assert records[0].type == WalletFileType.MATCHED
        assert records[0].name.startswith("expected_result_")
        assert records[0].wallets == [HIT]

    def test_no_save(self):
        """Test save=False leaves the store untouched."""
        self.use_case.execute([HIT], [HIT.address], save=False)
        assert self.files.list() == []

    def test_no_match_saves_nothing(self):
        """Test empty results are not stored."""
        assert self.use_case.execute([MISS], [HIT.address]) == []
        assert self.files.list() == []

    def test_without_repository(self):
        """Test matching works without a wallet file repository."""
        assert MatchTargets().execute([HIT], ["0x" + HIT.address[2:].upper()]) == [HIT]


if __name__ == "__main__":
    TestMatchTargets.run_as_main()
