"""
End-to-end balance check over the JSON-RPC client.

Three wallets on ETH: the primary endpoint times out on every call, the
first fallback answers. Only the wallet holding 1000 wei is reported.

Usage:
    python sondeur/tests/e2e/test_balance_end_to_end.py
    pytest sondeur/tests/e2e/test_balance_end_to_end.py
"""

import json
import os
import tempfile

import httpx
from click.testing import CliRunner

from shared.tests import LaborantTest

from sondeur.application.services.result_aggregator import (
    export_balance_reports,
    format_balance,
)
from sondeur.config.settings import SondeurConfig
from sondeur.di import DIContainer
from sondeur.domain.entities import Wallet
from sondeur.infrastructure.blockchain import BUILTIN_CHAINS, EvmRpcClient
from sondeur.infrastructure.persistence import InMemoryKeyValueStore
from sondeur.presentation.cli import cli

PRIMARY, FALLBACK = BUILTIN_CHAINS["ETH"].endpoints[:2]

WALLET_A = Wallet(address="0x" + "aa" * 20, private_key="0x" + "11" * 32)
WALLET_B = Wallet(address="0x" + "bb" * 20, private_key="0x" + "22" * 32)
WALLET_C = Wallet(address="0x" + "cc" * 20, private_key="0x" + "33" * 32)


class TestBalanceEndToEnd(LaborantTest):
    """Balance run with a dead primary endpoint."""

    component_name = "sondeur"
    test_category = "e2e"

    # ================================================================
    # Helper Methods
    # ================================================================

    def setup_test(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url).rstrip("/")
            self.requests.append(url)
            if url == PRIMARY.rstrip("/"):
                raise httpx.ReadTimeout("timed out", request=request)
            address = json.loads(request.content)["params"][0]
            result = "0x3e8" if address == WALLET_A.address else "0x0"
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})

        settings = SondeurConfig(
            storage_path=os.path.join(self._tmp.name, "store.json"),
            verbose=0,
            retry={"max_attempts": 3, "initial_delay": 0.0},
            batch={"batch_delay": 0.0},
        )
        self.container = DIContainer(
            settings=settings,
            store=InMemoryKeyValueStore(),
            query_client=EvmRpcClient(timeout=1.0, transport=httpx.MockTransport(handler)),
        )

    def teardown_test(self):
        self._tmp.cleanup()

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_fallback_finds_single_funded_wallet(self):
        """Test the fallback endpoint answers and one wallet is funded."""
        use_case = self.container.get_check_balances()
        try:
            outcome = await use_case.execute([WALLET_A, WALLET_B, WALLET_C], ["ETH"])
        finally:
            await self.container.shutdown()

        assert [r.wallet for r in outcome.funded] == [WALLET_A]
        assert outcome.indeterminate_count == 0

        result = outcome.reports[0].balances["ETH"]
        assert result.balance_wei == "1000"
        assert result.endpoint == FALLBACK
        assert format_balance(result.balance_wei) == "0.000000"

        export = export_balance_reports(outcome.funded)
        assert export == (
            f"{WALLET_A.private_key} - {WALLET_A.address} - "
            "ETH: 0.000000 ETH (1000 wei)"
        )

        # every wallet tried the primary once before falling back
        assert self.requests.count(PRIMARY.rstrip("/")) == 3
        assert self.requests.count(FALLBACK.rstrip("/")) == 3

    def test_cli_export_keeps_raw_wei(self):
        """Test the CLI export line carries the exact wei amount."""
        wallet_file = os.path.join(self._tmp.name, "wallets.txt")
        with open(wallet_file, "w", encoding="utf-8") as f:
            f.write(
                "\n".join(
                    f"{w.private_key} - {w.address}"
                    for w in (WALLET_A, WALLET_B, WALLET_C)
                )
            )
        output = os.path.join(self._tmp.name, "balances.txt")

        result = CliRunner().invoke(
            cli, ["check-balance", wallet_file, "-o", output], obj=self.container
        )

        assert result.exit_code == 0, result.output
        assert "1/3 wallets with balance" in result.output
        with open(output, encoding="utf-8") as f:
            assert "(1000 wei)" in f.read()


if __name__ == "__main__":
    TestBalanceEndToEnd.run_as_main()
