"""
Key-value store interface.

Persisted state (wallet lists, RPC configs, wallet file records) is kept
as JSON-encodable values under string keys.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class IKeyValueStore(ABC):
    """
    Abstract interface for JSON key-value persistence.

    Values must be JSON-encodable (dicts, lists, strings, numbers).
    """

    @abstractmethod
    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Read a value.

        Args:
            key: Storage key
            default: Returned when the key is absent

        Raises:
            StorageError: If the stored value cannot be decoded
        """

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Write a value, replacing any previous one.

        Raises:
            StorageError: If the value cannot be encoded or written
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys."""
