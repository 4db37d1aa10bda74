"""
Unit tests for domain value objects.

Usage:
    python sondeur/tests/unit/domain/test_value_objects.py
    pytest sondeur/tests/unit/domain/test_value_objects.py
"""

from shared.tests import LaborantTest

from sondeur.domain.exceptions import ValidationError
from sondeur.domain.value_objects import ChainConfig, ProgressState, RpcConfig


class TestValueObjects(LaborantTest):
    """Unit tests for ChainConfig, RpcConfig and ProgressState."""

    component_name = "sondeur"
    test_category = "unit"

    def test_chain_config_primary(self):
        """Test first endpoint is the primary."""
        chain = ChainConfig(id="ETH", endpoints=["https://a", "https://b"], display_name="Ethereum")
        assert chain.endpoints == ("https://a", "https://b")
        assert chain.primary == "https://a"
        assert chain.is_checkable
        assert chain.primary_only().endpoints == ("https://a",)

    def test_chain_config_without_endpoints(self):
        """Test empty endpoint list is not checkable."""
        chain = ChainConfig(id="XYZ", endpoints=(), display_name="XYZ")
        assert chain.primary is None
        assert not chain.is_checkable
        assert chain.primary_only().endpoints == ()

    def test_rpc_config_normalizes_chain(self):
        """Test chain id is upper-cased and url stripped."""
        config = RpcConfig(chain=" eth ", url=" https://rpc.example.org ")
        assert config.chain == "ETH"
        assert config.url == "https://rpc.example.org"
        assert len(config.id) == 12

    def test_rpc_config_rejects_bad_url(self):
        """Test non-http URLs raise ValidationError."""
        for url in ["", "ftp://rpc", "rpc.example.org", "https://"]:
            try:
                RpcConfig(chain="ETH", url=url)
                assert False, f"Expected ValidationError for {url!r}"
            except ValidationError:
                pass

    def test_rpc_config_round_trip(self):
        """Test dict layout keeps id and optional name."""
        config = RpcConfig(chain="BNB", url="https://bsc.example", name="mine")
        assert RpcConfig.from_dict(config.to_dict()) == config
        assert "name" not in RpcConfig(chain="BNB", url="https://x.io").to_dict()

    def test_progress_is_capped_and_monotonic(self):
        """Test progress never exceeds total or moves backwards."""
        progress = ProgressState(total=3)
        progress.advance()
        progress.advance(5)
        assert progress.current == 3
        assert progress.is_complete
        assert progress.percentage == 100.0

        try:
            progress.advance(-1)
            assert False, "Expected ValueError"
        except ValueError:
            pass

    def test_progress_snapshot_is_independent(self):
        """Test snapshot does not follow later advances."""
        progress = ProgressState(total=4)
        progress.advance()
        snapshot = progress.snapshot()
        progress.advance()
        assert snapshot.current == 1
        assert str(snapshot) == "1/4 (25.0%)"


if __name__ == "__main__":
    TestValueObjects.run_as_main()
