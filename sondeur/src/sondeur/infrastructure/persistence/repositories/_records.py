"""
Helpers for reading lists of records out of the key-value store.
"""

import logging
from typing import Any, Callable, List, TypeVar

from sondeur.domain.exceptions import SondeurException, StorageError
from sondeur.domain.services import IKeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_records(
    store: IKeyValueStore, key: str, decode: Callable[[Any], T]
) -> List[T]:
    """
    Decode the list stored under key.

    Unreadable data is logged and treated as an empty list. A single bad
    entry is skipped without discarding the rest.
    """
    try:
        raw = store.get(key, [])
    except StorageError as e:
        logger.warning(f"Ignoring unreadable '{key}': {e.message}")
        return []

    if not isinstance(raw, list):
        logger.warning(f"Ignoring '{key}': expected a list, got {type(raw).__name__}")
        return []

    records = []
    for index, item in enumerate(raw):
        try:
            records.append(decode(item))
        except (SondeurException, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed entry {index} in '{key}': {e}")
    return records
