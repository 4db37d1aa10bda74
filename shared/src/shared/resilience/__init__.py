"""
Resilience patterns for flaky remote endpoints.

This module provides:
- Retry: Automatic retry with exponential backoff
- EndpointFallback: Ordered endpoint fallback with retry rounds
"""

from shared.resilience.exceptions import (
    FallbackExhaustedError,
    ResilienceError,
    RetryError,
)
from shared.resilience.fallback import EndpointFallback, FallbackOutcome
from shared.resilience.retry import (
    BackoffStrategy,
    Retry,
    RetryConfig,
    compute_delay,
    with_retry,
)

__all__ = [
    # Retry
    "Retry",
    "RetryConfig",
    "RetryError",
    "BackoffStrategy",
    "compute_delay",
    "with_retry",
    # Fallback
    "EndpointFallback",
    "FallbackOutcome",
    "FallbackExhaustedError",
    # Base
    "ResilienceError",
]
