"""
Key-value store implementations.

InMemoryKeyValueStore is used by tests and one-off runs.
JsonFileKeyValueStore keeps every key in a single JSON document on disk.
"""

import copy
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from sondeur.domain.exceptions import StorageError
from sondeur.domain.services import IKeyValueStore

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore(IKeyValueStore):
    """
    Process-local store.

    Values go through a JSON round trip so callers never share mutable
    state with the store, same as the file-backed implementation.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return copy.deepcopy(default)
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value for '{key}' is not JSON-encodable: {e}")

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> List[str]:
        return sorted(self._data)


class JsonFileKeyValueStore(IKeyValueStore):
    """
    Store backed by one JSON object file.

    Writes go to a temporary file that replaces the target, so a crash
    never leaves a half-written document behind.
    """

    def __init__(self, path: str):
        """
        Initialize file store.

        Args:
            path: JSON file path (created on first write)
        """
        self.path = Path(os.path.expanduser(path))
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise StorageError(f"Cannot read store {self.path}: {e}")

        if not content.strip():
            return {}

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise StorageError(
                f"Corrupt store {self.path}: {e}", details={"path": str(self.path)}
            )

        if not isinstance(data, dict):
            raise StorageError(f"Store {self.path} must contain a JSON object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".store-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write store {self.path}: {e}")

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        with self._lock:
            return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._write(data)
        logger.debug(f"Stored key '{key}' in {self.path}")

    def delete(self, key: str) -> bool:
        with self._lock:
            data = self._load()
            if key not in data:
                return False
            del data[key]
            self._write(data)
            return True

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._load())
