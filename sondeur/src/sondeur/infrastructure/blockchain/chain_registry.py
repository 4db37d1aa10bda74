"""
Chain registry - built-in EVM chains and their public endpoints.

resolve_endpoints() is the pure lookup; ChainRegistry adds persisted
user endpoints on top of it.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from sondeur.domain.exceptions import EntityNotFoundError
from sondeur.domain.value_objects import ChainConfig, RpcConfig
from sondeur.infrastructure.persistence.repositories import RpcConfigRepository

UNKNOWN_SYMBOL = "TOKEN"


@dataclass(frozen=True)
class ChainDefinition:
    """Static description of a supported chain."""

    id: str
    display_name: str
    symbol: str
    endpoints: Tuple[str, ...]
    decimals: int = 18


BUILTIN_CHAINS: Dict[str, ChainDefinition] = {
    chain.id: chain
    for chain in (
        ChainDefinition(
            id="ETH",
            display_name="Ethereum",
            symbol="ETH",
            endpoints=(
                "https://eth.llamarpc.com",
                "https://rpc.ankr.com/eth",
                "https://cloudflare-eth.com",
                "https://ethereum-rpc.publicnode.com",
            ),
        ),
        ChainDefinition(
            id="BNB",
            display_name="BNB Smart Chain",
            symbol="BNB",
            endpoints=(
                "https://bsc-dataseed1.binance.org",
                "https://bsc-dataseed2.binance.org",
                "https://bsc-dataseed3.binance.org",
                "https://rpc.ankr.com/bsc",
            ),
        ),
        ChainDefinition(
            id="POLYGON",
            display_name="Polygon",
            symbol="MATIC",
            endpoints=(
                "https://polygon-rpc.com",
                "https://rpc-mainnet.matic.network",
                "https://rpc-mainnet.maticvigil.com",
                "https://rpc.ankr.com/polygon",
            ),
        ),
        ChainDefinition(
            id="BASE",
            display_name="Base",
            symbol="ETH",
            endpoints=(
                "https://mainnet.base.org",
                "https://base.blockpi.network/v1/rpc/public",
            ),
        ),
        ChainDefinition(
            id="OP",
            display_name="Optimism",
            symbol="ETH",
            endpoints=(
                "https://mainnet.optimism.io",
                "https://optimism.blockpi.network/v1/rpc/public",
            ),
        ),
        ChainDefinition(
            id="ARB",
            display_name="Arbitrum One",
            symbol="ETH",
            endpoints=(
                "https://arb1.arbitrum.io/rpc",
                "https://arbitrum.blockpi.network/v1/rpc/public",
                "https://rpc.ankr.com/arbitrum",
            ),
        ),
        ChainDefinition(
            id="AVAX",
            display_name="Avalanche C-Chain",
            symbol="AVAX",
            endpoints=(
                "https://api.avax.network/ext/bc/C/rpc",
                "https://rpc.ankr.com/avalanche",
            ),
        ),
        ChainDefinition(
            id="FTM",
            display_name="Fantom",
            symbol="FTM",
            endpoints=(
                "https://rpc.fantom.network",
                "https://rpc.ftm.tools",
                "https://rpcapi.fantom.network",
            ),
        ),
    )
}


def normalize_chain_id(chain_id: str) -> str:
    return (chain_id or "").strip().upper()


def chain_symbol(chain_id: str) -> str:
    """Native asset symbol for a chain (TOKEN when unknown)."""
    chain = BUILTIN_CHAINS.get(normalize_chain_id(chain_id))
    return chain.symbol if chain else UNKNOWN_SYMBOL


def resolve_endpoints(
    chain_id: str, user_overrides: Optional[Mapping[str, str]] = None
) -> List[str]:
    """
    Resolve a chain id to its ordered endpoint list.

    Args:
        chain_id: Chain symbol (e.g. "ETH")
        user_overrides: Optional chain id -> explicit primary RPC URL

    Returns:
        [override, *builtin] when an override exists, else builtin.
        Unknown chains yield an empty list.
    """
    chain = BUILTIN_CHAINS.get(normalize_chain_id(chain_id))
    if chain is None:
        return []

    endpoints = list(chain.endpoints)
    overrides = {
        normalize_chain_id(key): url for key, url in (user_overrides or {}).items()
    }
    primary = overrides.get(chain.id)
    if primary:
        endpoints.insert(0, primary)
    return endpoints


def _dedupe(urls: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for url in urls:
        if url not in seen:
            seen.add(url)
            ordered.append(url)
    return ordered


class ChainRegistry:
    """
    Chain lookup merging built-in endpoints with persisted user RPCs.

    Endpoint order for a chain:
        explicit primary (argument, else first persisted RPC)
        built-in defaults
        remaining persisted RPCs for that chain
    """

    def __init__(self, rpc_configs: RpcConfigRepository):
        """
        Initialize registry.

        Args:
            rpc_configs: Repository of user-added endpoints
        """
        self.rpc_configs = rpc_configs

    def primary_url_for(self, chain_id: str) -> Optional[str]:
        """First persisted RPC URL for a chain, if any."""
        configs = self.rpc_configs.list_for_chain(normalize_chain_id(chain_id))
        return configs[0].url if configs else None

    def known_chains(self) -> List[str]:
        """Built-in chain ids followed by custom-only chain ids."""
        custom = sorted(
            {c.chain for c in self.rpc_configs.list_all()} - set(BUILTIN_CHAINS)
        )
        return list(BUILTIN_CHAINS) + custom

    def get_chain(self, chain_id: str, primary_url: Optional[str] = None) -> ChainConfig:
        """
        Resolve one chain.

        Args:
            chain_id: Chain symbol
            primary_url: Explicit primary RPC URL for this run

        Returns:
            ChainConfig (endpoints empty when the chain cannot be checked)
        """
        chain_id = normalize_chain_id(chain_id)
        custom = [c.url for c in self.rpc_configs.list_for_chain(chain_id)]
        primary = primary_url or (custom[0] if custom else None)

        definition = BUILTIN_CHAINS.get(chain_id)
        if definition is not None:
            overrides = {chain_id: primary} if primary else None
            endpoints = resolve_endpoints(chain_id, overrides) + custom
            return ChainConfig(
                id=chain_id,
                endpoints=tuple(_dedupe(endpoints)),
                display_name=definition.display_name,
                symbol=definition.symbol,
                decimals=definition.decimals,
            )

        endpoints = ([primary] if primary and custom else []) + custom
        return ChainConfig(
            id=chain_id,
            endpoints=tuple(_dedupe(endpoints)),
            display_name=chain_id,
            symbol=UNKNOWN_SYMBOL,
        )

    def get_chains(
        self,
        chain_ids: Iterable[str],
        primary_urls: Optional[Mapping[str, str]] = None,
    ) -> List[ChainConfig]:
        """Resolve several chains, keeping the given order."""
        overrides = {
            normalize_chain_id(k): v for k, v in (primary_urls or {}).items()
        }
        return [
            self.get_chain(chain_id, overrides.get(normalize_chain_id(chain_id)))
            for chain_id in chain_ids
        ]

    def list_rpcs(self, chain_id: Optional[str] = None) -> List[RpcConfig]:
        if chain_id is None:
            return self.rpc_configs.list_all()
        return self.rpc_configs.list_for_chain(normalize_chain_id(chain_id))

    def add_rpc(self, chain_id: str, url: str, name: Optional[str] = None) -> RpcConfig:
        """
        Persist a custom endpoint.

        Raises:
            ValidationError: On malformed URL or duplicate endpoint
        """
        return self.rpc_configs.add(
            RpcConfig(chain=normalize_chain_id(chain_id), url=url, name=name)
        )

    def update_rpc(
        self,
        config_id: str,
        url: Optional[str] = None,
        name: Optional[str] = None,
    ) -> RpcConfig:
        """
        Change URL and/or name of a persisted endpoint.

        Raises:
            EntityNotFoundError: If no endpoint has that id
        """
        existing = self.rpc_configs.get(config_id)
        if existing is None:
            raise EntityNotFoundError("RpcConfig", config_id)
        return self.rpc_configs.update(
            RpcConfig(
                id=existing.id,
                chain=existing.chain,
                url=url or existing.url,
                name=name if name is not None else existing.name,
            )
        )

    def remove_rpc(self, config_id: str) -> RpcConfig:
        return self.rpc_configs.remove(config_id)

    def reset_rpcs(self) -> None:
        """Forget all custom endpoints; built-in defaults remain."""
        self.rpc_configs.reset()
