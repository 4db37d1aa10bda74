"""
Unit tests for target list loading.

Usage:
    python sondeur/tests/unit/infrastructure/test_target_list.py
    pytest sondeur/tests/unit/infrastructure/test_target_list.py
"""

import os
import tempfile

import httpx

from shared.resilience import RetryConfig
from shared.tests import LaborantTest

from sondeur.infrastructure.files import fetch_targets, parse_targets, read_targets

TARGETS = "0xAbC0000000000000000000000000000000000001\n# comment\n\n 0xdef0000000000000000000000000000000000002 \n"


class TestTargetList(LaborantTest):
    """Unit tests for parse/read/fetch of targets."""

    component_name = "sondeur"
    test_category = "unit"

    def _retry(self) -> RetryConfig:
        return RetryConfig(max_attempts=2, initial_delay=0.0, retry_on=(httpx.HTTPError,))

    def test_parse_keeps_0x_lines_lowercased(self):
        """Test only 0x lines are kept, trimmed and lower-cased."""
        assert parse_targets(TARGETS) == [
            "0xabc0000000000000000000000000000000000001",
            "0xdef0000000000000000000000000000000000002",
        ]

    def test_read_from_disk(self):
        """Test targets file is read and parsed."""
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "targets.txt")
            with open(path, "w", encoding="utf-8") as f:
                f.write(TARGETS)
            assert len(read_targets(path)) == 2

    def test_missing_file_is_empty(self):
        """Test an unreadable file yields an empty list."""
        assert read_targets("/nonexistent/targets.txt") == []

    async def test_fetch_success(self):
        """Test targets are downloaded over HTTP."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text=TARGETS))
        targets = await fetch_targets(
            "https://example.org/targets.txt",
            retry_config=self._retry(),
            transport=transport,
        )
        assert len(targets) == 2

    async def test_fetch_failure_is_empty(self):
        """Test a failing download is retried then yields []."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(404, text="not found")

        targets = await fetch_targets(
            "https://example.org/targets.txt",
            retry_config=self._retry(),
            transport=httpx.MockTransport(handler),
        )
        assert targets == []
        assert len(calls) == 2


if __name__ == "__main__":
    TestTargetList.run_as_main()
