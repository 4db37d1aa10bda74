"""
Unit tests for the Sondeur CLI.

Commands run through click's CliRunner against an in-memory store and
an RPC client on httpx.MockTransport.

Usage:
    python sondeur/tests/unit/presentation/test_cli.py
    pytest sondeur/tests/unit/presentation/test_cli.py
"""

import json
import os
import tempfile

import httpx
from click.testing import CliRunner

from shared.tests import LaborantTest

from sondeur.config.settings import SondeurConfig
from sondeur.di import DIContainer
from sondeur.infrastructure.blockchain import EvmRpcClient
from sondeur.infrastructure.persistence import InMemoryKeyValueStore
from sondeur.presentation.cli import cli

PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

FUNDED_KEY = "0x" + "11" * 32
FUNDED = "0x" + "aa" * 20
EMPTY_KEY = "0x" + "22" * 32
EMPTY = "0x" + "bb" * 20


class TestCli(LaborantTest):
    """Unit tests for CLI commands."""

    component_name = "sondeur"
    test_category = "unit"

    # ================================================================
    # Helper Methods
    # ================================================================

    def setup_test(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = self._tmp.name
        self.rpc_calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            payload = json.loads(request.content)
            self.rpc_calls.append(payload["method"])
            address = payload["params"][0]
            if payload["method"] == "eth_getBalance":
                result = "0x3e8" if address == FUNDED else "0x0"
            else:
                result = "0x5" if address == FUNDED else "0x0"
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})

        settings = SondeurConfig(
            storage_path=os.path.join(self.dir, "store.json"),
            verbose=0,
            retry={"max_attempts": 1, "initial_delay": 0.0},
            batch={"batch_delay": 0.0},
        )
        self.container = DIContainer(
            settings=settings,
            store=InMemoryKeyValueStore(),
            query_client=EvmRpcClient(timeout=1.0, transport=httpx.MockTransport(handler)),
        )
        self.runner = CliRunner()

    def teardown_test(self):
        self._tmp.cleanup()

    def _invoke(self, *args, **kwargs):
        return self.runner.invoke(cli, list(args), obj=self.container, **kwargs)

    def _wallet_file(self, name: str, *pairs) -> str:
        path = os.path.join(self.dir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(f"{key} - {address}" for key, address in pairs))
        return path

    # ================================================================
    # Balance / Usage Tests
    # ================================================================

    def test_check_balance_reports_and_exports(self):
        """Test funded wallets are listed and exported with raw wei."""
        wallets = self._wallet_file("w.txt", (FUNDED_KEY, FUNDED), (EMPTY_KEY, EMPTY))
        output = os.path.join(self.dir, "balances.txt")

        result = self._invoke("check-balance", wallets, "--chain", "ETH", "-o", output)

        assert result.exit_code == 0, result.output
        assert "1/2 wallets with balance" in result.output
        assert FUNDED in result.output
        with open(output, encoding="utf-8") as f:
            assert f.read() == (
                f"{FUNDED_KEY} - {FUNDED} - ETH: 0.000000 ETH (1000 wei)"
            )

    def test_check_balance_save_record(self):
        """Test --save keeps funded wallets as a checked file."""
        wallets = self._wallet_file("w.txt", (FUNDED_KEY, FUNDED))
        output = os.path.join(self.dir, "balances.txt")

        result = self._invoke("check-balance", wallets, "-o", output, "--save")

        assert result.exit_code == 0, result.output
        records = self.container.wallet_file_repository.list()
        assert [r.type.value for r in records] == ["checked"]

    def test_check_balance_bad_workers(self):
        """Test a zero worker count exits with an error."""
        wallets = self._wallet_file("w.txt", (FUNDED_KEY, FUNDED))
        result = self._invoke("check-balance", wallets, "--workers", "0")
        assert result.exit_code == 1
        assert self.rpc_calls == []

    def test_check_usage(self):
        """Test nonce-based usage statistics and export."""
        wallets = self._wallet_file("w.txt", (FUNDED_KEY, FUNDED), (EMPTY_KEY, EMPTY))
        output = os.path.join(self.dir, "used.txt")

        result = self._invoke("check-usage", wallets, "-o", output)

        assert result.exit_code == 0, result.output
        assert "total=2 used=1" in result.output
        assert set(self.rpc_calls) == {"eth_getTransactionCount"}
        with open(output, encoding="utf-8") as f:
            assert f.read() == f"{FUNDED_KEY},{FUNDED},5,w.txt"

    def test_no_wallets_loaded(self):
        """Test missing wallet files exit with an error."""
        result = self._invoke("check-balance", os.path.join(self.dir, "none.txt"))
        assert result.exit_code == 1
        assert "No wallets loaded" in result.output

    # ================================================================
    # Match / Compare / Derive Tests
    # ================================================================

    def test_match_with_targets_file(self):
        """Test matching against a local target list."""
        wallets = self._wallet_file("w.txt", (FUNDED_KEY, FUNDED), (EMPTY_KEY, EMPTY))
        targets = os.path.join(self.dir, "targets.txt")
        with open(targets, "w", encoding="utf-8") as f:
            f.write(FUNDED.upper().replace("0X", "0x") + "\n")

        result = self._invoke("match", wallets, "--targets-file", targets)

        assert result.exit_code == 0, result.output
        assert "1/2 wallets matched 1 targets" in result.output
        assert len(self.container.wallet_file_repository.list()) == 1

    def test_match_without_targets(self):
        """Test match requires a target source."""
        wallets = self._wallet_file("w.txt", (FUNDED_KEY, FUNDED))
        result = self._invoke("match", wallets)
        assert result.exit_code == 1

    def test_compare(self):
        """Test wallets common to two files."""
        a = self._wallet_file("a.txt", (FUNDED_KEY, FUNDED), (EMPTY_KEY, EMPTY))
        b = self._wallet_file("b.txt", (EMPTY_KEY, EMPTY.upper().replace("0X", "0x")))

        result = self._invoke("compare", a, b)

        assert result.exit_code == 0, result.output
        assert "1 wallets found in all files" in result.output
        assert EMPTY in result.output

    def test_compare_needs_two_files(self):
        """Test compare with one file exits with an error."""
        a = self._wallet_file("a.txt", (FUNDED_KEY, FUNDED))
        assert self._invoke("compare", a).exit_code == 1

    def test_derive(self):
        """Test derivation output and --save."""
        result = self._invoke("derive", PRIVATE_KEY, "--save")

        assert result.exit_code == 0, result.output
        assert f"{PRIVATE_KEY} - {ADDRESS}" in result.output
        assert [w.address for w in self.container.wallet_repository.load()] == [ADDRESS]

    def test_derive_invalid_key(self):
        """Test an invalid key exits with code 1."""
        result = self._invoke("derive", "0x1234")
        assert result.exit_code == 1

    # ================================================================
    # RPC / Files Tests
    # ================================================================

    def test_rpc_lifecycle(self):
        """Test add, list, update and remove of a custom endpoint."""
        result = self._invoke("rpc", "add", "eth", "https://mine.example", "--name", "mine")
        assert result.exit_code == 0, result.output

        config = self.container.chain_registry.list_rpcs()[0]
        assert config.chain == "ETH"

        listed = self._invoke("rpc", "list")
        assert "https://mine.example (mine)" in listed.output

        updated = self._invoke("rpc", "update", config.id, "--url", "https://new.example")
        assert updated.exit_code == 0, updated.output
        assert self.container.chain_registry.primary_url_for("ETH") == "https://new.example"

        removed = self._invoke("rpc", "remove", config.id)
        assert removed.exit_code == 0, removed.output
        assert "No custom RPC endpoints" in self._invoke("rpc", "list").output

    def test_rpc_remove_unknown(self):
        """Test removing an unknown endpoint exits with code 1."""
        assert self._invoke("rpc", "remove", "missing").exit_code == 1

    def test_rpc_reset(self):
        """Test reset after confirmation clears custom endpoints."""
        self._invoke("rpc", "add", "BNB", "https://bnb.example")
        result = self._invoke("rpc", "reset", "--yes")
        assert result.exit_code == 0, result.output
        assert self.container.chain_registry.list_rpcs() == []

    def test_files_add_list_export(self):
        """Test storing, listing and exporting a wallet file."""
        wallets = self._wallet_file("w.txt", (FUNDED_KEY, FUNDED), (EMPTY_KEY, EMPTY))
        assert self._invoke("files", "add", wallets).exit_code == 0

        listed = self._invoke("files", "list")
        assert "1 files (page 1/1)" in listed.output

        record = self.container.wallet_file_repository.list()[0]
        out_dir = os.path.join(self.dir, "out")
        exported = self._invoke("files", "export", record.id, "-d", out_dir)
        assert exported.exit_code == 0, exported.output
        with open(os.path.join(out_dir, "w.txt"), encoding="utf-8") as f:
            assert len(f.read().splitlines()) == 2

        assert self._invoke("files", "remove", record.id).exit_code == 0
        assert self.container.wallet_file_repository.list() == []


if __name__ == "__main__":
    TestCli.run_as_main()
