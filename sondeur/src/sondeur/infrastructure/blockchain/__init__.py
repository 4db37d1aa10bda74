"""
Blockchain infrastructure - chain registry, RPC client, key derivation.
"""

from sondeur.infrastructure.blockchain.chain_registry import (
    BUILTIN_CHAINS,
    ChainDefinition,
    ChainRegistry,
    chain_symbol,
    normalize_chain_id,
    resolve_endpoints,
)
from sondeur.infrastructure.blockchain.evm_rpc_client import EvmRpcClient
from sondeur.infrastructure.blockchain.wallet_deriver import derive_wallet

__all__ = [
    "BUILTIN_CHAINS",
    "ChainDefinition",
    "ChainRegistry",
    "EvmRpcClient",
    "chain_symbol",
    "derive_wallet",
    "normalize_chain_id",
    "resolve_endpoints",
]
