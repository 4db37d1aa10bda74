"""
Domain value objects.
"""

from sondeur.domain.value_objects.chain_config import ChainConfig
from sondeur.domain.value_objects.progress import ProgressState
from sondeur.domain.value_objects.rpc_config import RpcConfig

__all__ = ["ChainConfig", "ProgressState", "RpcConfig"]
