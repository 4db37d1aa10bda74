"""
ProgressState value object.
"""

from dataclasses import dataclass


@dataclass
class ProgressState:
    """
    Completed (wallet, chain) queries of a run.

    current only grows and never exceeds total.
    """

    current: int = 0
    total: int = 0

    def advance(self, step: int = 1) -> None:
        if step < 0:
            raise ValueError("Progress cannot move backwards")
        self.current = min(self.total, self.current + step)

    @property
    def is_complete(self) -> bool:
        return self.current >= self.total

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 100.0
        return self.current / self.total * 100

    def snapshot(self) -> "ProgressState":
        return ProgressState(current=self.current, total=self.total)

    def __str__(self) -> str:
        return f"{self.current}/{self.total} ({self.percentage:.1f}%)"
