"""
RpcConfig repository - user-added RPC endpoints.
"""

import logging
from typing import List, Optional

from sondeur.domain.exceptions import EntityNotFoundError, ValidationError
from sondeur.domain.services import IKeyValueStore
from sondeur.domain.value_objects import RpcConfig
from sondeur.infrastructure.persistence.repositories._records import load_records

logger = logging.getLogger(__name__)

RPC_CONFIGS_KEY = "wallet_generator_rpc_configs"


class RpcConfigRepository:
    """
    Persisted list of custom RPC endpoints.

    Order is insertion order; the first entry for a chain acts as that
    chain's primary endpoint.
    """

    def __init__(self, store: IKeyValueStore):
        self.store = store

    def list_all(self) -> List[RpcConfig]:
        return load_records(self.store, RPC_CONFIGS_KEY, RpcConfig.from_dict)

    def list_for_chain(self, chain: str) -> List[RpcConfig]:
        chain = (chain or "").strip().upper()
        return [c for c in self.list_all() if c.chain == chain]

    def get(self, config_id: str) -> Optional[RpcConfig]:
        for config in self.list_all():
            if config.id == config_id:
                return config
        return None

    def add(self, config: RpcConfig) -> RpcConfig:
        """
        Append an endpoint.

        Raises:
            ValidationError: If the same URL is already stored for the chain
        """
        configs = self.list_all()
        for existing in configs:
            if existing.chain == config.chain and existing.url == config.url:
                raise ValidationError(
                    f"RPC already configured for {config.chain}: {config.url}",
                    details={"id": existing.id},
                )
        configs.append(config)
        self._save(configs)
        logger.info(f"Added RPC {config.id} for {config.chain}")
        return config

    def update(self, config: RpcConfig) -> RpcConfig:
        """
        Replace the endpoint with the same id.

        Raises:
            EntityNotFoundError: If no endpoint has that id
        """
        configs = self.list_all()
        for index, existing in enumerate(configs):
            if existing.id == config.id:
                configs[index] = config
                self._save(configs)
                return config
        raise EntityNotFoundError("RpcConfig", config.id)

    def remove(self, config_id: str) -> RpcConfig:
        """
        Delete an endpoint by id.

        Raises:
            EntityNotFoundError: If no endpoint has that id
        """
        configs = self.list_all()
        remaining = [c for c in configs if c.id != config_id]
        if len(remaining) == len(configs):
            raise EntityNotFoundError("RpcConfig", config_id)
        removed = next(c for c in configs if c.id == config_id)
        self._save(remaining)
        logger.info(f"Removed RPC {config_id} ({removed.chain})")
        return removed

    def reset(self) -> None:
        """Drop every custom endpoint."""
        self.store.delete(RPC_CONFIGS_KEY)

    def _save(self, configs: List[RpcConfig]) -> None:
        self.store.set(RPC_CONFIGS_KEY, [c.to_dict() for c in configs])
