"""
Wallet entity - address / private key pair.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict

from sondeur.domain.exceptions import ValidationError

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
PRIVATE_KEY_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


def is_valid_address(value: str) -> bool:
    """Check 0x-prefixed 20-byte hex address format."""
    return bool(value) and ADDRESS_PATTERN.match(value) is not None


@dataclass(frozen=True)
class Wallet:
    """
    Wallet loaded from a file, the store, or derived from a key.

    Business rules:
    - address is 0x + 40 hex characters (any case)
    - private_key is 0x + 64 hex characters
    - The address/key relation is never re-verified after construction
    - Immutable once created
    """

    address: str
    private_key: str = field(repr=False)

    def __post_init__(self):
        """Validate field formats on creation."""
        if not is_valid_address(self.address):
            raise ValidationError(
                f"Invalid wallet address: {self.address!r}",
                details={"field": "address"},
            )

        if not self.private_key or not PRIVATE_KEY_PATTERN.match(self.private_key):
            raise ValidationError(
                f"Invalid private key for wallet {self.address}",
                details={"field": "private_key", "address": self.address},
            )

    @property
    def normalized_address(self) -> str:
        """Lower-cased address for case-insensitive comparison."""
        return self.address.lower()

    def truncated(self) -> str:
        """Return truncated address for display (e.g. '0xAbCd...1234')."""
        return f"{self.address[:6]}...{self.address[-4:]}"

    def to_dict(self) -> Dict[str, str]:
        """Serialize in the persisted layout."""
        return {"address": self.address, "privateKey": self.private_key}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Wallet":
        """
        Build from persisted layout.

        Accepts both privateKey and private_key keys.
        """
        private_key = data.get("privateKey", data.get("private_key", ""))
        return cls(address=str(data.get("address", "")), private_key=str(private_key))
