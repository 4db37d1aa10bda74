"""
Unit tests for Wallet entity.

Usage:
    python sondeur/tests/unit/domain/test_wallet.py
    pytest sondeur/tests/unit/domain/test_wallet.py
"""

from shared.tests import LaborantTest

from sondeur.domain.entities import Wallet
from sondeur.domain.exceptions import ValidationError

ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"


class TestWallet(LaborantTest):
    """Unit tests for Wallet entity."""

    component_name = "sondeur"
    test_category = "unit"

    def test_valid_wallet(self):
        """Test wallet accepts 0x address and 0x key."""
        wallet = Wallet(address=ADDRESS, private_key=PRIVATE_KEY)
        assert wallet.normalized_address == ADDRESS.lower()
        assert wallet.truncated() == "0x2c75...5c23"

    def test_private_key_not_in_repr(self):
        """Test repr never shows the private key."""
        wallet = Wallet(address=ADDRESS, private_key=PRIVATE_KEY)
        assert PRIVATE_KEY not in repr(wallet)

    def test_invalid_address_rejected(self):
        """Test malformed address raises ValidationError."""
        for address in ["", "0x123", ADDRESS[2:], "0x" + "g" * 40]:
            try:
                Wallet(address=address, private_key=PRIVATE_KEY)
                assert False, f"Expected ValidationError for {address!r}"
            except ValidationError as e:
                assert e.details["field"] == "address"

    def test_invalid_private_key_rejected(self):
        """Test malformed key raises ValidationError."""
        try:
            Wallet(address=ADDRESS, private_key=PRIVATE_KEY[2:])
            assert False, "Expected ValidationError"
        except ValidationError as e:
            assert e.details["field"] == "private_key"

    def test_dict_layout(self):
        """Test persisted layout uses privateKey."""
        wallet = Wallet(address=ADDRESS, private_key=PRIVATE_KEY)
        assert wallet.to_dict() == {"address": ADDRESS, "privateKey": PRIVATE_KEY}
        assert Wallet.from_dict(wallet.to_dict()) == wallet
        assert Wallet.from_dict({"address": ADDRESS, "private_key": PRIVATE_KEY}) == wallet

    def test_wallet_is_immutable(self):
        """Test wallet fields cannot be reassigned."""
        wallet = Wallet(address=ADDRESS, private_key=PRIVATE_KEY)
        try:
            wallet.address = "0x" + "0" * 40
            assert False, "Expected FrozenInstanceError"
        except AttributeError:
            pass


if __name__ == "__main__":
    TestWallet.run_as_main()
