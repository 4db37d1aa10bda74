"""
Unit tests for WalletFileRecord entity.

Usage:
    python sondeur/tests/unit/domain/test_wallet_file.py
    pytest sondeur/tests/unit/domain/test_wallet_file.py
"""

from datetime import datetime, timezone

from shared.tests import LaborantTest

from sondeur.domain.entities import Wallet, WalletFileRecord, WalletFileType
from sondeur.domain.exceptions import ValidationError

ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"


class TestWalletFileRecord(LaborantTest):
    """Unit tests for WalletFileRecord entity."""

    component_name = "sondeur"
    test_category = "unit"

    def _record(self, **kwargs) -> WalletFileRecord:
        defaults = {
            "name": "batch_1.txt",
            "wallets": [Wallet(address=ADDRESS, private_key=PRIVATE_KEY)],
        }
        defaults.update(kwargs)
        return WalletFileRecord(**defaults)

    def test_empty_name_rejected(self):
        """Test blank names raise ValidationError."""
        try:
            self._record(name="  ")
            assert False, "Expected ValidationError"
        except ValidationError:
            pass

    def test_matches_name_and_address(self):
        """Test search matches file name or wallet address, any case."""
        record = self._record()
        assert record.matches("BATCH")
        assert record.matches("0x2C7536")
        assert record.matches("")
        assert not record.matches("nothing")

    def test_dict_layout(self):
        """Test persisted layout keeps id, createdAt and type."""
        created = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        record = self._record(type=WalletFileType.MATCHED, created_at=created)

        data = record.to_dict()
        assert data["createdAt"] == created.isoformat()
        assert data["type"] == "matched"
        assert data["wallets"][0]["privateKey"] == PRIVATE_KEY

        restored = WalletFileRecord.from_dict(data)
        assert restored.id == record.id
        assert restored.created_at == created
        assert restored.type == WalletFileType.MATCHED
        assert restored.wallets == record.wallets


if __name__ == "__main__":
    TestWalletFileRecord.run_as_main()
