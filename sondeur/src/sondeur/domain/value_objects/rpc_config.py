"""
RpcConfig value object - a user-supplied endpoint for a chain.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from sondeur.domain.exceptions import ValidationError


@dataclass(frozen=True)
class RpcConfig:
    """
    Persisted RPC endpoint.

    Business rules:
    - chain is stored upper-case (ETH, BNB, ...)
    - url must be an absolute http(s) URL
    """

    chain: str
    url: str
    name: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    def __post_init__(self):
        chain = (self.chain or "").strip().upper()
        if not chain:
            raise ValidationError("RPC chain cannot be empty")
        object.__setattr__(self, "chain", chain)

        url = (self.url or "").strip()
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValidationError(
                f"Invalid RPC URL: {self.url!r}", details={"chain": chain}
            )
        object.__setattr__(self, "url", url)

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "chain": self.chain, "url": self.url}
        if self.name:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RpcConfig":
        return cls(
            id=str(data["id"]),
            chain=str(data["chain"]),
            url=str(data["url"]),
            name=data.get("name"),
        )
