"""
Cooperative cancellation for batch runs.
"""

from typing import Optional


class CancellationToken:
    """
    Flag checked by the orchestrator before each wallet and each chain.

    Cancelling never interrupts a query already in flight.
    """

    def __init__(self):
        self._cancelled = False
        self.reason: Optional[str] = None

    def cancel(self, reason: str = "cancelled") -> None:
        if not self._cancelled:
            self._cancelled = True
            self.reason = reason

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled
