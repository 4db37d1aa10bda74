"""
Dependency Injection Container for Sondeur.

Manages all service instances and their dependencies.
"""

from typing import Optional

from shared.resilience import EndpointFallback

from sondeur.application.services import BatchOrchestrator, ChainChecker
from sondeur.application.use_cases import (
    CheckBalances,
    CheckUsage,
    CompareWalletFiles,
    DeriveWallets,
    MatchTargets,
)
from sondeur.config.settings import SondeurConfig, get_settings
from sondeur.domain.exceptions import QueryFailedError
from sondeur.domain.services import IChainQueryClient, IKeyValueStore
from sondeur.infrastructure.blockchain import ChainRegistry, EvmRpcClient
from sondeur.infrastructure.persistence import (
    JsonFileKeyValueStore,
    RpcConfigRepository,
    WalletFileRepository,
    WalletRepository,
)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of services and repositories. The store
    and RPC client can be injected (tests pass an in-memory store and a
    client on httpx.MockTransport).
    """

    def __init__(
        self,
        settings: Optional[SondeurConfig] = None,
        store: Optional[IKeyValueStore] = None,
        query_client: Optional[IChainQueryClient] = None,
    ):
        self._settings = settings
        self._store = store
        self._query_client = query_client

        self._rpc_config_repository: Optional[RpcConfigRepository] = None
        self._wallet_repository: Optional[WalletRepository] = None
        self._wallet_file_repository: Optional[WalletFileRepository] = None
        self._chain_registry: Optional[ChainRegistry] = None
        self._chain_checker: Optional[ChainChecker] = None

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._query_client:
            await self._query_client.close()

    # Infrastructure Getters

    @property
    def settings(self) -> SondeurConfig:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def store(self) -> IKeyValueStore:
        """Get key-value store instance."""
        if self._store is None:
            self._store = JsonFileKeyValueStore(self.settings.storage_path)
        return self._store

    @property
    def query_client(self) -> IChainQueryClient:
        """Get JSON-RPC client instance."""
        if self._query_client is None:
            self._query_client = EvmRpcClient(
                timeout=self.settings.rpc.request_timeout,
                max_connections=self.settings.rpc.max_connections,
            )
        return self._query_client

    # Repository Getters

    @property
    def rpc_config_repository(self) -> RpcConfigRepository:
        if self._rpc_config_repository is None:
            self._rpc_config_repository = RpcConfigRepository(self.store)
        return self._rpc_config_repository

    @property
    def wallet_repository(self) -> WalletRepository:
        if self._wallet_repository is None:
            self._wallet_repository = WalletRepository(self.store)
        return self._wallet_repository

    @property
    def wallet_file_repository(self) -> WalletFileRepository:
        if self._wallet_file_repository is None:
            self._wallet_file_repository = WalletFileRepository(self.store)
        return self._wallet_file_repository

    # Domain Service Getters

    @property
    def chain_registry(self) -> ChainRegistry:
        if self._chain_registry is None:
            self._chain_registry = ChainRegistry(self.rpc_config_repository)
        return self._chain_registry

    @property
    def chain_checker(self) -> ChainChecker:
        """Get per-(wallet, chain) checker with endpoint fallback."""
        if self._chain_checker is None:
            config = self.settings.retry.to_retry_config(retry_on=(QueryFailedError,))
            self._chain_checker = ChainChecker(
                client=self.query_client,
                fallback=EndpointFallback(config, name="rpc-fallback"),
            )
        return self._chain_checker

    # Use Case Getters

    def get_check_balances(
        self,
        worker_count: Optional[int] = None,
        batch_size: Optional[int] = None,
    ) -> CheckBalances:
        batch = self.settings.batch
        return CheckBalances(
            chain_registry=self.chain_registry,
            checker=self.chain_checker,
            orchestrator=BatchOrchestrator(
                worker_count=batch.worker_count if worker_count is None else worker_count,
                batch_size=batch.batch_size if batch_size is None else batch_size,
                batch_delay=batch.batch_delay,
            ),
            default_strategy=batch.strategy,
        )

    def get_check_usage(
        self,
        worker_count: Optional[int] = None,
        batch_size: Optional[int] = None,
    ) -> CheckUsage:
        usage = self.settings.usage
        return CheckUsage(
            chain_registry=self.chain_registry,
            checker=self.chain_checker,
            orchestrator=BatchOrchestrator(
                worker_count=usage.worker_count if worker_count is None else worker_count,
                batch_size=usage.batch_size if batch_size is None else batch_size,
                batch_delay=0.0,
            ),
        )

    def get_match_targets(self) -> MatchTargets:
        return MatchTargets(self.wallet_file_repository)

    def get_compare_wallet_files(self) -> CompareWalletFiles:
        return CompareWalletFiles()

    def get_derive_wallets(self) -> DeriveWallets:
        return DeriveWallets(self.wallet_repository)


_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


async def shutdown_container() -> None:
    """Shutdown global DI container."""
    global _container
    if _container is not None:
        await _container.shutdown()
        _container = None
