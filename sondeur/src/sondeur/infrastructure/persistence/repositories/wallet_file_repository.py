"""
WalletFile repository - named wallet lists kept between runs.
"""

import logging
from typing import List, Optional

from sondeur.domain.entities import WalletFileRecord, WalletFileType
from sondeur.domain.exceptions import EntityNotFoundError
from sondeur.domain.services import IKeyValueStore
from sondeur.infrastructure.persistence.repositories._records import load_records

logger = logging.getLogger(__name__)

WALLET_FILES_KEY = "wallet_files"


class WalletFileRepository:
    """Stored wallet file records, listed newest first."""

    def __init__(self, store: IKeyValueStore):
        self.store = store

    def _load(self) -> List[WalletFileRecord]:
        return load_records(self.store, WALLET_FILES_KEY, WalletFileRecord.from_dict)

    def list(
        self,
        file_type: Optional[WalletFileType] = None,
        search: str = "",
    ) -> List[WalletFileRecord]:
        """
        List records.

        Args:
            file_type: Only records of this type
            search: Case-insensitive match on name or wallet address
        """
        records = [
            r
            for r in self._load()
            if (file_type is None or r.type == file_type) and r.matches(search)
        ]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def get(self, record_id: str) -> WalletFileRecord:
        """
        Raises:
            EntityNotFoundError: If no record has that id
        """
        for record in self._load():
            if record.id == record_id:
                return record
        raise EntityNotFoundError("WalletFile", record_id)

    def add(self, record: WalletFileRecord) -> WalletFileRecord:
        records = self._load()
        records.append(record)
        self._save(records)
        logger.info(
            f"Saved wallet file '{record.name}' ({len(record.wallets)} wallets)"
        )
        return record

    def remove(self, record_id: str) -> WalletFileRecord:
        """
        Raises:
            EntityNotFoundError: If no record has that id
        """
        records = self._load()
        for index, record in enumerate(records):
            if record.id == record_id:
                del records[index]
                self._save(records)
                return record
        raise EntityNotFoundError("WalletFile", record_id)

    def _save(self, records: List[WalletFileRecord]) -> None:
        self.store.set(WALLET_FILES_KEY, [r.to_dict() for r in records])
