"""
Application DTOs.
"""

from sondeur.application.dto.check_dto import (
    BalanceCheckOutcome,
    CompareResult,
    UsageCheckOutcome,
)

__all__ = ["BalanceCheckOutcome", "CompareResult", "UsageCheckOutcome"]
