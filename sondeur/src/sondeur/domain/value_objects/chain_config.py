"""
ChainConfig value object - a chain and its ordered endpoints.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ChainConfig:
    """
    Resolved chain configuration for one run.

    Business rules:
    - endpoints are ordered: first is primary, rest are fallbacks
    - An empty endpoint list means the chain cannot be checked
    """

    id: str
    endpoints: Tuple[str, ...]
    display_name: str
    symbol: str = "TOKEN"
    decimals: int = 18

    def __post_init__(self):
        object.__setattr__(self, "endpoints", tuple(self.endpoints))

    @property
    def primary(self) -> Optional[str]:
        """Primary endpoint, or None when there is none."""
        return self.endpoints[0] if self.endpoints else None

    @property
    def is_checkable(self) -> bool:
        return bool(self.endpoints)

    def primary_only(self) -> "ChainConfig":
        """Copy restricted to the primary endpoint."""
        return ChainConfig(
            id=self.id,
            endpoints=self.endpoints[:1],
            display_name=self.display_name,
            symbol=self.symbol,
            decimals=self.decimals,
        )
