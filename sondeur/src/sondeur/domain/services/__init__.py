"""
Domain service interfaces.
"""

from sondeur.domain.services.i_chain_query_client import IChainQueryClient
from sondeur.domain.services.i_key_value_store import IKeyValueStore

__all__ = ["IChainQueryClient", "IKeyValueStore"]
