"""
Batch orchestrator - runs (wallet, chain) checks over a wallet list.

Strategies:
    sequential        wallets outer, chains inner, one query at a time,
                      short pause every ceil(N*C/W) queries
    worker_partition  W contiguous wallet chunks on an asyncio.Queue,
                      W workers, concurrent sub-batches inside a chunk,
                      results re-associated by chunk index
"""

import asyncio
import logging
import math
from dataclasses import dataclass, field
from typing import (
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Sequence,
    TypeVar,
)

from sondeur.application.services.cancellation import CancellationToken
from sondeur.domain.entities import Wallet
from sondeur.domain.exceptions import ValidationError
from sondeur.domain.value_objects import ChainConfig, ProgressState

logger = logging.getLogger(__name__)

T = TypeVar("T")

CheckFunc = Callable[[Wallet, ChainConfig], Awaitable[T]]
ProgressCallback = Callable[[ProgressState], None]

SEQUENTIAL = "sequential"
WORKER_PARTITION = "worker_partition"


@dataclass
class BatchRunResult(Generic[T]):
    """Outcome of one run; results are in wallet-then-chain input order."""

    results: List[T] = field(default_factory=list)
    progress: ProgressState = field(default_factory=ProgressState)
    cancelled: bool = False
    strategy: str = SEQUENTIAL


class BatchOrchestrator:
    """
    Runs a check coroutine over every (wallet, chain) pair.

    The check coroutine is expected to convert endpoint failures into
    results; anything it raises aborts the whole run.
    """

    def __init__(
        self,
        worker_count: int = 4,
        batch_size: int = 100,
        batch_delay: float = 0.05,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            worker_count: W, number of workers / delay period divisor
            batch_size: Concurrent wallets per sub-batch (worker_partition)
            batch_delay: Pause in seconds between batches (sequential)
            sleep: Awaitable sleep function (default: asyncio.sleep)
        """
        self.worker_count = worker_count
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self._sleep = sleep or asyncio.sleep

    async def run(
        self,
        wallets: Sequence[Wallet],
        chains: Sequence[ChainConfig],
        check: CheckFunc,
        strategy: str = SEQUENTIAL,
        cancel_token: Optional[CancellationToken] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchRunResult:
        """
        Check every wallet against every chain.

        Args:
            wallets: Wallets in input order
            chains: Chains in check order
            check: Coroutine function (wallet, chain) -> result
            strategy: "sequential" or "worker_partition"
            cancel_token: Stops the run before the next wallet or chain
            on_progress: Called with a progress snapshot after each query

        Returns:
            BatchRunResult (partial with cancelled=True when cancelled)

        Raises:
            ValidationError: Bad worker count, batch size, strategy or
                empty chain list
        """
        self._validate(chains, strategy)
        cancel_token = cancel_token or CancellationToken()
        progress = ProgressState(current=0, total=len(wallets) * len(chains))

        logger.info(
            f"Starting {strategy} run: {len(wallets)} wallets x "
            f"{len(chains)} chains, {self.worker_count} workers"
        )

        if strategy == WORKER_PARTITION:
            results = await self._run_partitioned(
                wallets, chains, check, cancel_token, progress, on_progress
            )
        else:
            results = await self._run_sequential(
                wallets, chains, check, cancel_token, progress, on_progress
            )

        if cancel_token.is_cancelled:
            logger.warning(f"Run cancelled at {progress}")
        else:
            logger.info(f"Run complete: {progress}")

        return BatchRunResult(
            results=results,
            progress=progress,
            cancelled=cancel_token.is_cancelled,
            strategy=strategy,
        )

    def _validate(self, chains: Sequence[ChainConfig], strategy: str) -> None:
        if self.worker_count < 1:
            raise ValidationError(
                f"Worker count must be at least 1, got {self.worker_count}"
            )
        if self.batch_size < 1:
            raise ValidationError(
                f"Batch size must be at least 1, got {self.batch_size}"
            )
        if not chains:
            raise ValidationError("Select at least one chain")
        if strategy not in (SEQUENTIAL, WORKER_PARTITION):
            raise ValidationError(f"Unknown strategy: {strategy}")

    @staticmethod
    def _advance(
        progress: ProgressState, on_progress: Optional[ProgressCallback]
    ) -> None:
        progress.advance()
        if on_progress is not None:
            on_progress(progress.snapshot())

    async def _check_wallet(
        self,
        wallet: Wallet,
        chains: Sequence[ChainConfig],
        check: CheckFunc,
        cancel_token: CancellationToken,
        progress: ProgressState,
        on_progress: Optional[ProgressCallback],
    ) -> List:
        results = []
        for chain in chains:
            if cancel_token.is_cancelled:
                break
            results.append(await check(wallet, chain))
            self._advance(progress, on_progress)
        return results

    async def _run_sequential(
        self,
        wallets: Sequence[Wallet],
        chains: Sequence[ChainConfig],
        check: CheckFunc,
        cancel_token: CancellationToken,
        progress: ProgressState,
        on_progress: Optional[ProgressCallback],
    ) -> List:
        results = []
        delay_every = max(1, math.ceil(progress.total / self.worker_count))

        for wallet in wallets:
            if cancel_token.is_cancelled:
                break
            for chain in chains:
                if cancel_token.is_cancelled:
                    break
                results.append(await check(wallet, chain))
                self._advance(progress, on_progress)

                if self.batch_delay > 0 and progress.current % delay_every == 0:
                    await self._sleep(self.batch_delay)

        return results

    async def _run_partitioned(
        self,
        wallets: Sequence[Wallet],
        chains: Sequence[ChainConfig],
        check: CheckFunc,
        cancel_token: CancellationToken,
        progress: ProgressState,
        on_progress: Optional[ProgressCallback],
    ) -> List:
        if not wallets:
            return []

        chunk_size = math.ceil(len(wallets) / self.worker_count)
        work_queue: asyncio.Queue = asyncio.Queue()
        result_queue: asyncio.Queue = asyncio.Queue()

        chunk_count = 0
        for start in range(0, len(wallets), chunk_size):
            work_queue.put_nowait((chunk_count, wallets[start:start + chunk_size]))
            chunk_count += 1

        async def worker(worker_id: int) -> None:
            while True:
                try:
                    index, chunk = work_queue.get_nowait()
                except asyncio.QueueEmpty:
                    return

                chunk_results = []
                for start in range(0, len(chunk), self.batch_size):
                    if cancel_token.is_cancelled:
                        break
                    sub_batch = chunk[start:start + self.batch_size]
                    per_wallet = await asyncio.gather(
                        *(
                            self._check_wallet(
                                wallet,
                                chains,
                                check,
                                cancel_token,
                                progress,
                                on_progress,
                            )
                            for wallet in sub_batch
                        )
                    )
                    for wallet_results in per_wallet:
                        chunk_results.extend(wallet_results)

                logger.debug(
                    f"Worker {worker_id} finished chunk {index} "
                    f"({len(chunk_results)} results)"
                )
                await result_queue.put((index, chunk_results))

        tasks = [
            asyncio.create_task(worker(i))
            for i in range(min(self.worker_count, chunk_count))
        ]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        by_index: Dict[int, List] = {}
        while not result_queue.empty():
            index, chunk_results = result_queue.get_nowait()
            by_index[index] = chunk_results

        results = []
        for index in sorted(by_index):
            results.extend(by_index[index])
        return results
