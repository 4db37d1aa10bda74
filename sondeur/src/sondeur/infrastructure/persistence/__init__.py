"""
Persistence layer - JSON key-value store and repositories.
"""

from sondeur.infrastructure.persistence.key_value_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from sondeur.infrastructure.persistence.repositories import (
    RpcConfigRepository,
    WalletFileRepository,
    WalletRepository,
)

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "RpcConfigRepository",
    "WalletFileRepository",
    "WalletRepository",
]
