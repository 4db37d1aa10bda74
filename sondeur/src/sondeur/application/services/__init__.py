"""
Application services.
"""

from sondeur.application.services.batch_orchestrator import (
    SEQUENTIAL,
    WORKER_PARTITION,
    BatchOrchestrator,
    BatchRunResult,
)
from sondeur.application.services.cancellation import CancellationToken
from sondeur.application.services.chain_checker import ChainChecker
from sondeur.application.services import result_aggregator

__all__ = [
    "SEQUENTIAL",
    "WORKER_PARTITION",
    "BatchOrchestrator",
    "BatchRunResult",
    "CancellationToken",
    "ChainChecker",
    "result_aggregator",
]
