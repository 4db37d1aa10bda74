"""
Domain exceptions.
"""

from sondeur.domain.exceptions.base import (
    EntityNotFoundError,
    SondeurException,
    ValidationError,
)
from sondeur.domain.exceptions.query import QueryFailedError
from sondeur.domain.exceptions.storage import StorageError, WalletFileParseError

__all__ = [
    "SondeurException",
    "ValidationError",
    "EntityNotFoundError",
    "QueryFailedError",
    "StorageError",
    "WalletFileParseError",
]
