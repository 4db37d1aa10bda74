"""
Unit tests for key-value store implementations.

Usage:
    python sondeur/tests/unit/infrastructure/test_key_value_store.py
    pytest sondeur/tests/unit/infrastructure/test_key_value_store.py
"""

import json
import os
import tempfile

from shared.tests import LaborantTest

from sondeur.domain.exceptions import StorageError
from sondeur.infrastructure.persistence import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)


class TestKeyValueStores(LaborantTest):
    """Unit tests for in-memory and JSON file stores."""

    component_name = "sondeur"
    test_category = "unit"

    def setup_test(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "nested", "store.json")

    def teardown_test(self):
        self._tmp.cleanup()

    def test_memory_store_isolates_values(self):
        """Test returned values are copies of stored data."""
        store = InMemoryKeyValueStore()
        data = {"items": [1, 2]}
        store.set("k", data)
        data["items"].append(3)

        loaded = store.get("k")
        loaded["items"].append(4)
        assert store.get("k") == {"items": [1, 2]}

    def test_memory_store_default_and_delete(self):
        """Test missing keys return default and delete reports existence."""
        store = InMemoryKeyValueStore({"a": 1})
        assert store.get("missing", []) == []
        assert store.keys() == ["a"]
        assert store.delete("a") is True
        assert store.delete("a") is False

    def test_memory_store_rejects_unencodable(self):
        """Test non-JSON values raise StorageError."""
        store = InMemoryKeyValueStore()
        try:
            store.set("k", {1, 2})
            assert False, "Expected StorageError"
        except StorageError:
            pass

    def test_file_store_persists_between_instances(self):
        """Test data written by one instance is read by another."""
        JsonFileKeyValueStore(self.path).set("wallet_files", [{"id": "1"}])

        store = JsonFileKeyValueStore(self.path)
        assert store.get("wallet_files") == [{"id": "1"}]
        assert store.keys() == ["wallet_files"]

        with open(self.path, encoding="utf-8") as f:
            assert json.load(f) == {"wallet_files": [{"id": "1"}]}

    def test_file_store_missing_file_is_empty(self):
        """Test a store with no file yet behaves as empty."""
        store = JsonFileKeyValueStore(self.path)
        assert store.get("k", "default") == "default"
        assert store.delete("k") is False

    def test_file_store_corrupt_file_raises(self):
        """Test corrupt JSON raises StorageError."""
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")

        try:
            JsonFileKeyValueStore(self.path).get("k")
            assert False, "Expected StorageError"
        except StorageError as e:
            assert e.details["path"] == self.path


if __name__ == "__main__":
    TestKeyValueStores.run_as_main()
