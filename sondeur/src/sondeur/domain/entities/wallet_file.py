"""
WalletFile entity - a named wallet list kept in the store.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List

from sondeur.domain.entities.wallet import Wallet
from sondeur.domain.exceptions import ValidationError


class WalletFileType(str, Enum):
    """Origin of a stored wallet list."""

    GENERATED = "generated"
    UPLOADED = "uploaded"
    MATCHED = "matched"
    CHECKED = "checked"


@dataclass
class WalletFileRecord:
    """
    Wallet list session record.

    Persisted layout: {id, name, wallets[], createdAt, type}.
    """

    name: str
    wallets: List[Wallet]
    type: WalletFileType = WalletFileType.UPLOADED
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValidationError("Wallet file name cannot be empty")

    def matches(self, search: str) -> bool:
        """Case-insensitive search on file name and wallet addresses."""
        term = search.strip().lower()
        if not term:
            return True
        if term in self.name.lower():
            return True
        return any(term in w.normalized_address for w in self.wallets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "wallets": [w.to_dict() for w in self.wallets],
            "createdAt": self.created_at.isoformat(),
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WalletFileRecord":
        created_at = data.get("createdAt")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            wallets=[Wallet.from_dict(w) for w in data.get("wallets", [])],
            type=WalletFileType(data.get("type", WalletFileType.UPLOADED.value)),
            created_at=(
                datetime.fromisoformat(created_at)
                if created_at
                else datetime.now(timezone.utc)
            ),
        )
